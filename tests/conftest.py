"""Pytest fixtures for testing"""

import pytest
from typing import Callable
from fastapi.testclient import TestClient
from micr_gateway.api.main import create_app
from micr_gateway.domain.institutions import INSTITUTION_DIRECTORY
from micr_gateway.domain.models import (
    ComplianceLevel,
    InstitutionRecord,
    InstitutionStatus,
    InstitutionType,
    RegulatoryBody,
    RiskProfile,
)


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def bmo() -> InstitutionRecord:
    return INSTITUTION_DIRECTORY["001"]


@pytest.fixture
def make_institution() -> Callable[..., InstitutionRecord]:
    """
    Factory for ad-hoc records outside the directory.

    Baseline is an active, CDIC-insured, OSFI-regulated bank with a low
    profile, standard compliance and a large branch network, so that each
    test only overrides the fields it exercises.
    """

    def _make(**overrides) -> InstitutionRecord:
        fields = dict(
            institution_number="999",
            name="Example Bank of Canada",
            common_name="Example Bank",
            short_name="EXB",
            type=InstitutionType.BANK,
            regulatory_body=RegulatoryBody.OSFI,
            status=InstitutionStatus.ACTIVE,
            cdic=True,
            deposit_insurance="CDIC",
            headquarters="Toronto, ON",
            customer_service="1-800-555-0100",
            primary_provinces=("ON",),
            branches=500,
            founded=1900,
            risk_profile=RiskProfile.LOW,
            compliance_level=ComplianceLevel.STANDARD,
        )
        fields.update(overrides)
        return InstitutionRecord(**fields)

    return _make
