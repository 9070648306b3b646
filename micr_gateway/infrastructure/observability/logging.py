"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pythonjsonlogger import jsonlogger
from micr_gateway.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_micr_analysis(
    request_id: str,
    transit_found: bool,
    transit_valid: Optional[bool],
    parsing_error_count: int,
    duration_ms: float,
) -> None:
    """Log MICR parse outcome. Never pass account or cheque numbers here."""
    logging.info(
        "MICR line analyzed",
        extra={
            "request_id": request_id,
            "step": "micr_analysis_complete",
            "transit_found": transit_found,
            "transit_valid": transit_valid,
            "parsing_error_count": parsing_error_count,
            "duration_ms": duration_ms,
        },
    )


def log_enrichment(
    request_id: str,
    institution_code: Any,
    valid_for_processing: bool,
    risk_level: str,
    duration_ms: float,
) -> None:
    """Log enrichment verdict for compliance review"""
    logging.info(
        "MICR enrichment completed",
        extra={
            "request_id": request_id,
            "step": "enrichment_complete",
            "institution_code": institution_code,
            "processing_outcome": "eligible" if valid_for_processing else "ineligible",
            "risk_level": risk_level,
            "duration_ms": duration_ms,
        },
    )


def log_institution_validation(request_id: str, institution_code: str, is_valid: bool, risk_level: str) -> None:
    logging.info(
        "Institution validated",
        extra={
            "request_id": request_id,
            "step": "institution_validation",
            "institution_code": institution_code,
            "is_valid": is_valid,
            "risk_level": risk_level,
        },
    )
