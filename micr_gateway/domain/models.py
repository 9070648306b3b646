"""Domain models - pure Python dataclasses representing MICR and institution records"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class InstitutionType(str, Enum):
    BANK = "Bank"
    CREDIT_UNION = "Credit Union"
    TRUST_COMPANY = "Trust Company"
    CAISSE_POPULAIRE = "Caisse Populaire"


class RegulatoryBody(str, Enum):
    OSFI = "OSFI"
    PROVINCIAL = "Provincial"
    CUDIC = "CUDIC"
    DICO = "DICO"


class InstitutionStatus(str, Enum):
    ACTIVE = "Active"
    MERGED = "Merged"
    CLOSED = "Closed"
    ACQUIRED = "Acquired"


class RiskProfile(str, Enum):
    """Inherent risk profile carried by the reference data"""

    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class ComplianceLevel(str, Enum):
    STANDARD = "Standard"
    ENHANCED = "Enhanced"
    SPECIAL = "Special"


class RiskLevel(str, Enum):
    """Coarse risk level reported by validation"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class ChecksumResult:
    """Outcome of the CPA check digit test on a 9-digit transit number"""

    is_valid: bool
    calculated_check_digit: Optional[str]


@dataclass
class TransitValidationDetail:
    """Format + checksum verdict for one transit number (BBBBBFFFC)"""

    original_input: Any
    is_valid: bool
    is_format_valid: bool
    is_checksum_valid: Optional[bool]  # None when the format is invalid
    branch_code: Optional[str]
    institution_code: Optional[str]
    calculated_check_digit: Optional[str]  # implied by the first 8 digits
    expected_check_digit: Optional[str]  # present in the input
    error_messages: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class MicrSymbols:
    """E-13B delimiter glyphs recognised by the MICR tokenizer"""

    transit: str = "⑆"
    amount: str = "⑇"
    on_us: str = "⑈"
    dash: str = "⑉"

    def canonical_map(self) -> Dict[str, str]:
        """Glyph -> canonical ASCII marker"""
        return {self.transit: "t", self.amount: "a", self.on_us: "o", self.dash: "d"}


@dataclass
class ParsedMicrLine:
    """Best-effort decomposition of a raw MICR line"""

    raw_micr_original: str
    standardized_micr: str
    transit_number: Optional[str] = None
    account_number: Optional[str] = None
    check_number: Optional[str] = None
    transaction_code: Optional[str] = None
    amount: Optional[str] = None
    auxiliary_on_us: Optional[str] = None
    parsing_errors: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class InstitutionRecord:
    """Static reference entry for a Canadian financial institution"""

    institution_number: str
    name: str
    common_name: str
    short_name: str
    type: InstitutionType
    regulatory_body: RegulatoryBody
    status: InstitutionStatus
    cdic: bool
    deposit_insurance: str
    headquarters: str  # "City, PR"
    customer_service: str
    primary_provinces: Tuple[str, ...]
    branches: int  # 0 for digital-only
    founded: int
    risk_profile: RiskProfile
    compliance_level: ComplianceLevel
    assets: Optional[str] = None
    website: Optional[str] = None
    swift_code: Optional[str] = None
    verification_phone: Optional[str] = None
    fraud_reporting_phone: Optional[str] = None
    special_notes: Optional[str] = None
    successor: Optional[str] = None  # acquiring / merged-into institution


@dataclass
class InstitutionValidationResult:
    """Verdict of checking an institution code against the directory"""

    is_valid: bool
    institution: Optional[InstitutionRecord]
    message: str
    risk_level: RiskLevel
    compliance_notes: List[str] = field(default_factory=list)
    banking_guidance: List[str] = field(default_factory=list)


@dataclass
class InstitutionRiskAssessment:
    """0-100 risk score with itemised factors"""

    risk_score: int
    risk_factors: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)
    compliance_requirements: List[str] = field(default_factory=list)


@dataclass
class BankingContext:
    """Compact projection of an institution for quick display"""

    bank_name: str
    bank_type: InstitutionType
    customer_service: str
    verification_phone: Optional[str]
    fraud_reporting: Optional[str]
    regulatory_body: RegulatoryBody
    deposit_insurance: str
    risk_profile: RiskProfile
    special_notes: Optional[str]


@dataclass
class EnhancedMicrContext:
    """Extracted cheque fields enriched with institution intelligence"""

    original_micr: Dict[str, Any]
    institution_validation: InstitutionValidationResult
    enhanced_data: Dict[str, Any]
    banking_context: Optional[BankingContext]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MicrAnalysis:
    """Raw MICR line run through parsing, transit validation and enrichment"""

    parsed: ParsedMicrLine
    transit_validation: Optional[TransitValidationDetail]
    branch_location: Optional[str]
    enrichment: EnhancedMicrContext

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
