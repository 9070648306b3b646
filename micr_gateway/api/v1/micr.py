"""POST /v1/micr/parse and /v1/micr/enhance - MICR line analysis endpoints"""

import time
import logging
from typing import Any, Dict
from fastapi import APIRouter, Body, Depends, HTTPException, Request
from fastapi.encoders import jsonable_encoder

from micr_gateway.api.v1.schemas import EnhancedMicrResponse, MicrAnalysisResponse, MicrParseRequest
from micr_gateway.api.dependencies import get_micr_symbols, get_request_id
from micr_gateway.domain.enrichment import analyze_micr_line, derive_institution_code, enhance_micr_with_banking_data
from micr_gateway.domain.micr_parser import validate_account_format
from micr_gateway.domain.models import EnhancedMicrContext, MicrSymbols
from micr_gateway.infrastructure.observability.logging import log_enrichment, log_micr_analysis
from micr_gateway.infrastructure.observability.metrics import (
    record_enrichment,
    record_micr_parse,
    record_transit_validation,
)

router = APIRouter()


def _record_enrichment(request_id: str, context: EnhancedMicrContext, start_time: float) -> None:
    validation = context.institution_validation
    risk = context.enhanced_data.get("institution_risk")
    record_enrichment(validation.is_valid, risk.risk_score if risk else None)
    log_enrichment(
        request_id,
        derive_institution_code(context.original_micr),
        validation.is_valid,
        validation.risk_level.value,
        (time.time() - start_time) * 1000,
    )


@router.post("/micr/parse", response_model=MicrAnalysisResponse)
def parse_micr(
    request_body: MicrParseRequest,
    request: Request,
    symbols: MicrSymbols = Depends(get_micr_symbols),
):
    """
    Parse a raw MICR line and enrich it with institution data.

    Flow:
    1. Tokenize the line into transit / account / cheque / amount fields
    2. Validate the transit number (format + CPA checksum)
    3. Resolve branch region and institution, score institution risk
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        analysis = analyze_micr_line(request_body.micr_line, symbols)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    parsed = analysis.parsed
    transit_valid = analysis.transit_validation.is_valid if analysis.transit_validation else None
    record_micr_parse(parsed.transit_number is not None)
    if transit_valid is not None:
        record_transit_validation(transit_valid)
    log_micr_analysis(
        request_id,
        parsed.transit_number is not None,
        transit_valid,
        len(parsed.parsing_errors),
        (time.time() - start_time) * 1000,
    )
    _record_enrichment(request_id, analysis.enrichment, start_time)

    payload = jsonable_encoder(analysis)
    payload["account_format_valid"] = validate_account_format(parsed.account_number)
    return payload


@router.post("/micr/enhance", response_model=EnhancedMicrResponse)
def enhance_micr(
    request: Request,
    fields: Dict[str, Any] = Body(..., description="Cheque fields from the extraction service"),
):
    """
    Enrich extracted cheque fields with institution validation and risk.

    Accepts any JSON object; transitNumber / institutionNumber are used when
    present and every other key is passed through.
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        context = enhance_micr_with_banking_data(fields)
    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    _record_enrichment(request_id, context, start_time)
    return jsonable_encoder(context)
