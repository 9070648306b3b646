"""GET /v1/transit/{transit_number} - transit number format and checksum check"""

from fastapi import APIRouter
from fastapi.encoders import jsonable_encoder

from micr_gateway.api.v1.schemas import TransitResponse
from micr_gateway.domain.checksum import validate_transit_number
from micr_gateway.domain.institutions import get_branch_location
from micr_gateway.infrastructure.observability.metrics import record_transit_validation

router = APIRouter()


@router.get("/transit/{transit_number}", response_model=TransitResponse)
def get_transit_validation(transit_number: str):
    """
    Validate a 9-digit transit number (BBBBBFFFC).

    Malformed numbers are not an HTTP error: the response carries
    is_format_valid=false and the reasons in error_messages.
    """
    detail = validate_transit_number(transit_number)
    record_transit_validation(detail.is_valid)

    return TransitResponse(
        validation=jsonable_encoder(detail),
        branch_location=get_branch_location(detail.branch_code),
    )
