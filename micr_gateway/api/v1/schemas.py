"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class MicrParseRequest(BaseModel):
    """Request body for POST /v1/micr/parse"""

    micr_line: str = Field(..., min_length=1, max_length=200, description="Raw MICR line, E-13B glyphs allowed")


class InstitutionSchema(BaseModel):
    """Directory entry for a Canadian financial institution"""

    institution_number: str
    name: str
    common_name: str
    short_name: str
    type: str
    regulatory_body: str
    status: str
    cdic: bool
    deposit_insurance: str
    headquarters: str
    customer_service: str
    primary_provinces: List[str]
    branches: int
    founded: int
    risk_profile: str
    compliance_level: str
    assets: Optional[str] = None
    website: Optional[str] = None
    swift_code: Optional[str] = None
    verification_phone: Optional[str] = None
    fraud_reporting_phone: Optional[str] = None
    special_notes: Optional[str] = None
    successor: Optional[str] = None


class InstitutionValidationSchema(BaseModel):
    is_valid: bool
    institution: Optional[InstitutionSchema] = None
    message: str
    risk_level: str
    compliance_notes: List[str]
    banking_guidance: List[str]


class RiskAssessmentSchema(BaseModel):
    risk_score: int = Field(..., ge=0, le=100)
    risk_factors: List[str]
    recommendations: List[str]
    compliance_requirements: List[str]


class InstitutionRiskResponse(BaseModel):
    """Response for GET /v1/institutions/{code}/risk"""

    institution_number: str
    risk_level: str
    assessment: RiskAssessmentSchema


class BankingContextSchema(BaseModel):
    bank_name: str
    bank_type: str
    customer_service: str
    verification_phone: Optional[str] = None
    fraud_reporting: Optional[str] = None
    regulatory_body: str
    deposit_insurance: str
    risk_profile: str
    special_notes: Optional[str] = None


class EnhancedMicrResponse(BaseModel):
    """Response for POST /v1/micr/enhance"""

    original_micr: Dict[str, Any]
    institution_validation: InstitutionValidationSchema
    enhanced_data: Dict[str, Any]
    banking_context: Optional[BankingContextSchema] = None


class TransitValidationSchema(BaseModel):
    original_input: Any
    is_valid: bool
    is_format_valid: bool
    is_checksum_valid: Optional[bool] = None
    branch_code: Optional[str] = None
    institution_code: Optional[str] = None
    calculated_check_digit: Optional[str] = None
    expected_check_digit: Optional[str] = None
    error_messages: List[str]


class TransitResponse(BaseModel):
    """Response for GET /v1/transit/{transit_number}"""

    validation: TransitValidationSchema
    branch_location: Optional[str] = None


class ParsedMicrSchema(BaseModel):
    raw_micr_original: str
    standardized_micr: str
    transit_number: Optional[str] = None
    account_number: Optional[str] = None
    check_number: Optional[str] = None
    transaction_code: Optional[str] = None
    amount: Optional[str] = None
    auxiliary_on_us: Optional[str] = None
    parsing_errors: List[str]


class MicrAnalysisResponse(BaseModel):
    """Response for POST /v1/micr/parse"""

    parsed: ParsedMicrSchema
    transit_validation: Optional[TransitValidationSchema] = None
    branch_location: Optional[str] = None
    account_format_valid: bool
    enrichment: EnhancedMicrResponse


class InstitutionSearchResponse(BaseModel):
    """Response for GET /v1/institutions"""

    query: Optional[str] = None
    count: int
    institutions: List[InstitutionSchema]
