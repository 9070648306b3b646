"""Institution validation - status, insurance and compliance rules over directory records"""

from typing import Any, List
from micr_gateway.domain.institutions import get_institution, is_institution_code
from micr_gateway.domain.models import (
    ComplianceLevel,
    InstitutionRecord,
    InstitutionStatus,
    InstitutionType,
    InstitutionValidationResult,
    RegulatoryBody,
    RiskLevel,
)

# Statuses under which items may still be processed
PROCESSABLE_STATUSES = (InstitutionStatus.ACTIVE, InstitutionStatus.ACQUIRED, InstitutionStatus.MERGED)
TRANSITIONAL_STATUSES = (InstitutionStatus.ACQUIRED, InstitutionStatus.MERGED)


def _at_least_medium(level: RiskLevel) -> RiskLevel:
    return RiskLevel.MEDIUM if level == RiskLevel.LOW else level


def _headquarters_province(headquarters: str) -> str:
    # "Lévis, QC" -> "QC"
    parts = headquarters.split(", ")
    return parts[1] if len(parts) > 1 else headquarters


def _invalid_format_result() -> InstitutionValidationResult:
    return InstitutionValidationResult(
        is_valid=False,
        institution=None,
        message="Institution number must be exactly 3 digits.",
        risk_level=RiskLevel.HIGH,
        compliance_notes=["Invalid format - Canadian institution numbers are always 3 digits."],
        banking_guidance=[
            "Verify MICR line quality for correct institution code.",
            "Check for scanning errors if code is malformed.",
        ],
    )


def _not_found_result(code: str) -> InstitutionValidationResult:
    return InstitutionValidationResult(
        is_valid=False,
        institution=None,
        message=(
            f"Institution number {code} is not found in this database. "
            "It may be a smaller FI, a new FI, or an error."
        ),
        risk_level=RiskLevel.HIGH,
        compliance_notes=[
            "Unrecognized institution code.",
            "Not found in local Payments Canada FI subset.",
            "May be a foreign institution, a non-deposit-taking FI, or invalid.",
        ],
        banking_guidance=[
            "Cross-reference with the official Payments Canada Financial Institutions File (FIF).",
            "Consider placing a hold pending manual verification, especially for high-value items.",
            "Document all verification attempts.",
        ],
    )


def _closed_result(institution: InstitutionRecord) -> InstitutionValidationResult:
    return InstitutionValidationResult(
        is_valid=False,
        institution=institution,
        message=f"Institution {institution.common_name} ({institution.institution_number}) is permanently CLOSED.",
        risk_level=RiskLevel.HIGH,
        compliance_notes=["Institution is permanently closed and no longer accepts deposits or processes items."],
        banking_guidance=[
            "Reject item. Do not process.",
            "Contact remitter for alternative payment.",
            "Check for any official wind-down instructions if applicable.",
        ],
    )


def validate_institution(code: Any) -> InstitutionValidationResult:
    """
    Validate a 3-digit institution code against the directory.

    Rule order:
    1. Format guard and lookup guard (both invalid / high risk)
    2. Status: Closed is terminal; Acquired/Merged stay processable but
       escalate Low -> Medium; Active starts at the record's risk profile
    3. Modifiers applied on top of any non-closed status: deposit
       insurance, provincial regulation, branch network, compliance tier,
       special notes
    """
    if not is_institution_code(code):
        return _invalid_format_result()

    institution = get_institution(code)
    if institution is None:
        return _not_found_result(code)

    return evaluate_institution(institution)


def evaluate_institution(institution: InstitutionRecord) -> InstitutionValidationResult:
    """Apply the status and modifier rules to a record already looked up"""
    if institution.status == InstitutionStatus.CLOSED:
        return _closed_result(institution)

    compliance_notes: List[str] = []
    banking_guidance: List[str] = []
    risk_level = RiskLevel(institution.risk_profile.value.lower())

    if institution.status in TRANSITIONAL_STATUSES:
        risk_level = _at_least_medium(risk_level)
        acquirer = institution.successor or "the acquiring institution"
        compliance_notes.append(
            f"Institution status: {institution.status.value}. Operations may be integrated with {acquirer}."
        )
        compliance_notes.append(
            "Account ownership and cheque routing may have changed. "
            "Verify current routing with the acquiring institution."
        )
        banking_guidance.append(f"Confirm current routing and processing instructions with {acquirer}.")
        banking_guidance.append("Older cheques from this institution may require careful scrutiny during transition periods.")
        banking_guidance.append("Document the acquisition/merger status.")

    # Deposit insurance
    if institution.cdic:
        compliance_notes.append("CDIC insured institution.")
    else:
        risk_level = _at_least_medium(risk_level)
        compliance_notes.append(f"Not CDIC insured. Covered by: {institution.deposit_insurance}.")
        banking_guidance.append(f"Understand the coverage limits and rules of {institution.deposit_insurance}.")
        if institution.type in (InstitutionType.CREDIT_UNION, InstitutionType.CAISSE_POPULAIRE):
            banking_guidance.append("Apply credit union / caisse populaire verification procedures where they differ.")

    # Regulatory oversight
    compliance_notes.append(f"Regulated by: {institution.regulatory_body.value}.")
    if institution.regulatory_body == RegulatoryBody.PROVINCIAL:
        province = _headquarters_province(institution.headquarters)
        banking_guidance.append(f"Adhere to {province} provincial regulatory requirements for this institution.")

    # Branch network
    if 0 < institution.branches < 10:
        compliance_notes.append("Small institution with limited branch network.")
        banking_guidance.append("May warrant additional verification for large or unusual transactions.")
    elif institution.branches == 0:
        compliance_notes.append("Digital-only institution with no physical branches.")
        banking_guidance.append("Use digital verification channels and be aware of different fraud patterns.")

    # Compliance tier
    if institution.compliance_level == ComplianceLevel.ENHANCED:
        risk_level = _at_least_medium(risk_level)
        compliance_notes.append("Requires Enhanced compliance monitoring and due diligence.")
        banking_guidance.append("Apply enhanced due diligence (EDD) procedures as per internal policy.")
    elif institution.compliance_level == ComplianceLevel.SPECIAL:
        compliance_notes.append("Requires Special compliance monitoring and due diligence.")
        banking_guidance.append("Apply highest level of due diligence and consult internal compliance/risk teams.")

    if institution.special_notes:
        compliance_notes.append(institution.special_notes)

    return InstitutionValidationResult(
        is_valid=institution.status in PROCESSABLE_STATUSES,
        institution=institution,
        message=(
            f"Institution: {institution.common_name} ({institution.institution_number}). "
            f"Status: {institution.status.value}."
        ),
        risk_level=risk_level,
        compliance_notes=compliance_notes,
        banking_guidance=banking_guidance,
    )
