"""Institution risk scoring engine - additive point model over directory records"""

from typing import List
from micr_gateway.domain.models import (
    ComplianceLevel,
    InstitutionRecord,
    InstitutionRiskAssessment,
    InstitutionStatus,
    RegulatoryBody,
    RiskLevel,
    RiskProfile,
)
from micr_gateway.domain.validation import evaluate_institution

# Points per trigger; Low is a floor of 5, not zero
PROFILE_POINTS = {
    RiskProfile.HIGH: 40,
    RiskProfile.MEDIUM: 20,
    RiskProfile.LOW: 5,
}
NON_CDIC_POINTS = 15
PROVINCIAL_POINTS = 5
TRANSITION_POINTS = 15
DIGITAL_ONLY_POINTS = 10
SMALL_NETWORK_POINTS = 5
SMALL_NETWORK_BRANCHES = 20
ENHANCED_POINTS = 10
SPECIAL_POINTS = 20
MAX_SCORE = 100


def assess_institution_risk(institution: InstitutionRecord) -> InstitutionRiskAssessment:
    """
    Score an institution from 0 (lowest risk) to 100 (do not process).

    Scoring:
    - Closed status: exactly 100, nothing else evaluated
    - Risk profile: High +40, Medium +20, Low +5
    - Not CDIC insured +15, provincially regulated +5
    - Acquired/Merged +15
    - Digital-only (0 branches) +10, fewer than 20 branches +5
    - Enhanced compliance +10, Special compliance +20

    compliance_requirements is copied from evaluate_institution() on the
    same record so both views explain elevated compliance the same way.
    """
    # Rules only, no directory lookup: same notes as validate_institution()
    # for directory records, while ad-hoc records are judged on their own fields
    validation = evaluate_institution(institution)
    compliance_requirements = list(validation.compliance_notes)

    if institution.status == InstitutionStatus.CLOSED:
        return InstitutionRiskAssessment(
            risk_score=MAX_SCORE,
            risk_factors=["Institution is CLOSED. Items should not be processed."],
            recommendations=["Reject item. Contact customer for alternative payment method."],
            compliance_requirements=compliance_requirements,
        )

    score = PROFILE_POINTS[institution.risk_profile]
    risk_factors: List[str] = []
    recommendations: List[str] = []

    if institution.risk_profile == RiskProfile.HIGH:
        risk_factors.append("Institution classified with a high inherent risk profile.")
    elif institution.risk_profile == RiskProfile.MEDIUM:
        risk_factors.append("Institution classified with a medium inherent risk profile.")

    if not institution.cdic:
        score += NON_CDIC_POINTS
        risk_factors.append(f"Not CDIC insured; covered by {institution.deposit_insurance}.")
        recommendations.append(f"Verify specifics of {institution.deposit_insurance} coverage and limits.")

    if institution.regulatory_body == RegulatoryBody.PROVINCIAL:
        score += PROVINCIAL_POINTS
        risk_factors.append("Provincially regulated entity; ensure compliance with relevant provincial statutes.")

    if institution.status in (InstitutionStatus.ACQUIRED, InstitutionStatus.MERGED):
        score += TRANSITION_POINTS
        risk_factors.append(f"Institution status: {institution.status.value}. Potential transition risks.")
        recommendations.append("Confirm current processing channels and account validity with the acquiring/merged entity.")

    if institution.branches == 0:
        score += DIGITAL_ONLY_POINTS
        risk_factors.append("Digital-only institution; no physical branch network for recourse.")
        recommendations.append("Ensure robust digital verification methods are employed.")
    elif 0 < institution.branches < SMALL_NETWORK_BRANCHES:
        score += SMALL_NETWORK_POINTS
        risk_factors.append("Limited physical branch network.")

    if institution.compliance_level == ComplianceLevel.ENHANCED:
        score += ENHANCED_POINTS
        risk_factors.append("Institution requires enhanced compliance monitoring.")
        recommendations.append("Apply enhanced due diligence (EDD) procedures.")
    elif institution.compliance_level == ComplianceLevel.SPECIAL:
        score += SPECIAL_POINTS
        risk_factors.append("Institution under special compliance measures or scrutiny.")
        recommendations.append("Apply highest level of due diligence and consult internal compliance/risk teams.")

    score = min(max(score, 0), MAX_SCORE)

    if not risk_factors:
        risk_factors.append("Standard low-risk profile for an active, CDIC-insured institution.")

    return InstitutionRiskAssessment(
        risk_score=score,
        risk_factors=risk_factors,
        recommendations=recommendations,
        compliance_requirements=compliance_requirements,
    )


def classify_risk_score(score: int) -> RiskLevel:
    """
    Map a 0-100 score to a coarse level.

    Bands:
    - 0-29:   low (major banks land at 5)
    - 30-59:  medium
    - 60-100: high
    """
    if score < 30:
        return RiskLevel.LOW
    elif score < 60:
        return RiskLevel.MEDIUM
    else:
        return RiskLevel.HIGH
