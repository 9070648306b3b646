"""GET /v1/institutions - directory search, validation and risk endpoints"""

from typing import Optional
from fastapi import APIRouter, HTTPException, Query, Request
from fastapi.encoders import jsonable_encoder

from micr_gateway.api.v1.schemas import (
    InstitutionRiskResponse,
    InstitutionSearchResponse,
    InstitutionValidationSchema,
)
from micr_gateway.api.dependencies import get_request_id
from micr_gateway.config import settings
from micr_gateway.domain.exceptions import InstitutionNotFoundError
from micr_gateway.domain.institutions import (
    INSTITUTION_DIRECTORY,
    get_institutions_by_province,
    get_institutions_by_type,
    require_institution,
    search_institutions,
)
from micr_gateway.domain.models import InstitutionType
from micr_gateway.domain.scoring import assess_institution_risk, classify_risk_score
from micr_gateway.domain.validation import validate_institution
from micr_gateway.infrastructure.observability.logging import log_institution_validation
from micr_gateway.infrastructure.observability.metrics import record_institution_validation

router = APIRouter()


@router.get("/institutions", response_model=InstitutionSearchResponse)
def list_institutions(
    q: Optional[str] = Query(None, description="Name, number, headquarters or SWIFT fragment"),
    province: Optional[str] = Query(None, min_length=2, max_length=2, description="Two-letter province code"),
    institution_type: Optional[InstitutionType] = Query(None, alias="type", description="Institution type"),
):
    """
    Search the institution directory.

    Filters combine: q narrows by text, province and type narrow further.
    Without any filter the whole directory is returned.
    """
    if q is not None:
        results = search_institutions(
            q,
            limit=settings.institution_search_limit,
            min_length=settings.institution_search_min_length,
        )
    else:
        results = list(INSTITUTION_DIRECTORY.values())

    if province is not None:
        in_province = {i.institution_number for i in get_institutions_by_province(province)}
        results = [i for i in results if i.institution_number in in_province]

    if institution_type is not None:
        of_type = {i.institution_number for i in get_institutions_by_type(institution_type)}
        results = [i for i in results if i.institution_number in of_type]

    return InstitutionSearchResponse(
        query=q,
        count=len(results),
        institutions=jsonable_encoder(results),
    )


@router.get("/institutions/{code}", response_model=InstitutionValidationSchema)
def get_institution_validation(code: str, request: Request):
    """
    Validate an institution code.

    Unknown and malformed codes return 200 with is_valid=false: a miss is an
    expected outcome against a partial directory.
    """
    result = validate_institution(code)

    record_institution_validation(result.risk_level.value)
    log_institution_validation(get_request_id(request), code, result.is_valid, result.risk_level.value)

    return jsonable_encoder(result)


@router.get("/institutions/{code}/risk", response_model=InstitutionRiskResponse)
def get_institution_risk(code: str):
    """Score a directory institution from 0 to 100"""
    try:
        institution = require_institution(code)
    except InstitutionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    assessment = assess_institution_risk(institution)

    return InstitutionRiskResponse(
        institution_number=institution.institution_number,
        risk_level=classify_risk_score(assessment.risk_score).value,
        assessment=jsonable_encoder(assessment),
    )
