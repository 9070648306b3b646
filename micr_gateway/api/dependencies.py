"""Dependency injection for FastAPI endpoints"""

from fastapi import Request
from micr_gateway.config import settings
from micr_gateway.domain.models import MicrSymbols


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_micr_symbols() -> MicrSymbols:
    """Delimiter glyph table configured for this deployment"""
    return settings.micr_symbols()
