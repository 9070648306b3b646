"""MICR enrichment - merge extracted cheque fields with institution intelligence"""

from typing import Any, Dict, Mapping, Optional
from micr_gateway.domain.checksum import validate_transit_number
from micr_gateway.domain.institutions import get_branch_location
from micr_gateway.domain.micr_parser import DEFAULT_MICR_SYMBOLS, parse_micr_line
from micr_gateway.domain.models import (
    BankingContext,
    EnhancedMicrContext,
    InstitutionRecord,
    MicrAnalysis,
    MicrSymbols,
)
from micr_gateway.domain.scoring import assess_institution_risk
from micr_gateway.domain.validation import validate_institution

# Passed to the validator when no code can be derived, so callers still get
# a structured not-found result
INVALID_INSTITUTION_SENTINEL = "INVALID"


def _string_field(fields: Mapping[str, Any], *names: str) -> Optional[str]:
    """First non-empty string value among the given keys"""
    for name in names:
        value = fields.get(name)
        if isinstance(value, str) and value:
            return value
    return None


def derive_institution_code(fields: Mapping[str, Any]) -> Any:
    """
    Institution code from an extracted-fields bag.

    Explicit institutionNumber wins, whatever its type, so a malformed value
    is rejected by the validator's format guard; otherwise characters 5-7
    of a transitNumber of at least 8 characters (BBBBBFFFC).
    """
    for name in ("institutionNumber", "institution_number"):
        value = fields.get(name)
        if value is not None and value != "":
            return value

    transit_number = _string_field(fields, "transitNumber", "transit_number")
    if transit_number and len(transit_number) >= 8:
        return transit_number[5:8]
    return None


def build_banking_context(institution: InstitutionRecord) -> BankingContext:
    return BankingContext(
        bank_name=institution.common_name,
        bank_type=institution.type,
        customer_service=institution.customer_service,
        verification_phone=institution.verification_phone,
        fraud_reporting=institution.fraud_reporting_phone,
        regulatory_body=institution.regulatory_body,
        deposit_insurance=institution.deposit_insurance,
        risk_profile=institution.risk_profile,
        special_notes=institution.special_notes,
    )


def enhance_micr_with_banking_data(fields: Optional[Mapping[str, Any]]) -> EnhancedMicrContext:
    """
    Enrich loosely-typed extracted cheque fields with directory data.

    Unknown keys are carried through untouched and missing keys are
    tolerated; absence always shows up as None, never as an exception.
    """
    original: Dict[str, Any] = dict(fields) if isinstance(fields, Mapping) else {}

    code = derive_institution_code(original)
    validation = validate_institution(INVALID_INSTITUTION_SENTINEL if code is None else code)
    institution = validation.institution

    enhanced_data = {
        **original,
        "institution_details": institution,
        "institution_risk": assess_institution_risk(institution) if institution else None,
        "derived_compliance_guidance": list(validation.compliance_notes),
        "derived_banking_guidance": list(validation.banking_guidance),
        "is_institution_valid_for_processing": validation.is_valid,
    }

    return EnhancedMicrContext(
        original_micr=original,
        institution_validation=validation,
        enhanced_data=enhanced_data,
        banking_context=build_banking_context(institution) if institution else None,
    )


def analyze_micr_line(raw: Any, symbols: MicrSymbols = DEFAULT_MICR_SYMBOLS) -> MicrAnalysis:
    """
    Full pass over a raw MICR line: tokenize, validate the transit number,
    locate the branch and enrich with institution data.
    """
    parsed = parse_micr_line(raw, symbols)

    transit_validation = None
    branch_location = None
    if parsed.transit_number:
        transit_validation = validate_transit_number(parsed.transit_number)
        branch_location = get_branch_location(transit_validation.branch_code)

    extracted = {
        "transitNumber": parsed.transit_number,
        "accountNumber": parsed.account_number,
        "checkNumber": parsed.check_number,
        "amount": parsed.amount,
        "rawExtractedMicr": parsed.raw_micr_original,
    }

    return MicrAnalysis(
        parsed=parsed,
        transit_validation=transit_validation,
        branch_location=branch_location,
        enrichment=enhance_micr_with_banking_data(extracted),
    )
