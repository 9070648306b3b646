"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InstitutionNotFoundError(DomainException):
    """Institution code is malformed or absent from the directory"""

    def __init__(self, institution_number: str):
        super().__init__(f"Institution {institution_number} not found")
        self.institution_number = institution_number
