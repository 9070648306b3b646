"""CPA Standard 006 check digit for Canadian transit numbers"""

from typing import Any, List, Optional
from micr_gateway.domain.models import ChecksumResult, TransitValidationDetail

# Positional weights for d1..d9; the check digit (d9) carries weight 3
TRANSIT_WEIGHTS = [1, 7, 3, 1, 7, 3, 1, 7, 3]


def _is_digits(value: Any, length: int) -> bool:
    # str.isdigit() accepts non-ASCII digits such as "²"
    return isinstance(value, str) and len(value) == length and value.isascii() and value.isdigit()


def _weighted_sum(digits: str) -> int:
    return sum(int(d) * w for d, w in zip(digits, TRANSIT_WEIGHTS))


def calculate_check_digit(eight_digits: Any) -> Optional[str]:
    """
    Derive the 9th digit for an 8-digit branch+institution prefix.

    Returns the unique digit d with (prefix_sum + 3d) % 10 == 0, or None
    when the input is not exactly 8 ASCII digits.
    """
    if not _is_digits(eight_digits, 8):
        return None

    prefix_sum = _weighted_sum(eight_digits)
    for check_digit in range(10):
        if (prefix_sum + check_digit * TRANSIT_WEIGHTS[8]) % 10 == 0:
            return str(check_digit)
    return None


def validate_checksum(transit_number: Any) -> ChecksumResult:
    """Weighted mod-10 test over all 9 digits"""
    if not _is_digits(transit_number, 9):
        return ChecksumResult(is_valid=False, calculated_check_digit=None)

    return ChecksumResult(
        is_valid=_weighted_sum(transit_number) % 10 == 0,
        calculated_check_digit=calculate_check_digit(transit_number[:8]),
    )


def validate_transit_number(transit_number: Any) -> TransitValidationDetail:
    """
    Validate a transit number for format (BBBBBFFFC) and CPA checksum.

    Errors accumulate, so a 7-character alphanumeric input reports both the
    length and the non-digit problem.
    """
    errors: List[str] = []

    if not isinstance(transit_number, str):
        errors.append("Input must be a string.")
    else:
        if len(transit_number) != 9:
            errors.append("Transit number must be exactly 9 digits long.")
        if not (transit_number.isascii() and transit_number.isdigit()):
            errors.append("Transit number must contain only digits.")

    if errors:
        return TransitValidationDetail(
            original_input=transit_number,
            is_valid=False,
            is_format_valid=False,
            is_checksum_valid=None,
            branch_code=None,
            institution_code=None,
            calculated_check_digit=None,
            expected_check_digit=None,
            error_messages=errors,
        )

    checksum = validate_checksum(transit_number)
    if not checksum.is_valid:
        errors.append("CPA checksum validation failed.")

    return TransitValidationDetail(
        original_input=transit_number,
        is_valid=checksum.is_valid,
        is_format_valid=True,
        is_checksum_valid=checksum.is_valid,
        branch_code=transit_number[0:5],
        institution_code=transit_number[5:8],
        calculated_check_digit=calculate_check_digit(transit_number[0:8]),
        expected_check_digit=transit_number[8],
        error_messages=errors,
    )
