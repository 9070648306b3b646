"""Unit tests for the institution directory and its lookups"""

import pytest
from micr_gateway.domain.exceptions import InstitutionNotFoundError
from micr_gateway.domain.institutions import (
    ALL_PROVINCES,
    BRANCH_REGIONS,
    INSTITUTION_DIRECTORY,
    REGION_UNDETERMINED,
    get_branch_location,
    get_institution,
    get_institutions_by_province,
    get_institutions_by_type,
    is_institution_code,
    require_institution,
    search_institutions,
)
from micr_gateway.domain.models import InstitutionStatus, InstitutionType, RegulatoryBody


def test_directory_keys_match_records():
    """Every key is the record's own 3-digit institution number"""
    assert len(INSTITUTION_DIRECTORY) >= 13
    for code, record in INSTITUTION_DIRECTORY.items():
        assert code == record.institution_number
        assert is_institution_code(code)


def test_directory_is_read_only():
    with pytest.raises(TypeError):
        INSTITUTION_DIRECTORY["999"] = INSTITUTION_DIRECTORY["001"]


def test_directory_records_are_consistent():
    for record in INSTITUTION_DIRECTORY.values():
        assert record.branches >= 0
        assert record.primary_provinces
        if record.regulatory_body == RegulatoryBody.PROVINCIAL:
            assert record.cdic is False
        if record.status in (InstitutionStatus.ACQUIRED, InstitutionStatus.MERGED):
            assert record.successor


def test_get_institution_known_codes():
    assert get_institution("001").short_name == "BMO"
    assert get_institution("003").common_name == "RBC Royal Bank"
    assert get_institution("016").status == InstitutionStatus.ACQUIRED
    assert get_institution("815").type == InstitutionType.CAISSE_POPULAIRE


@pytest.mark.parametrize("code", ["999", "01", "0001", None, 1])
def test_get_institution_misses(code):
    assert get_institution(code) is None


def test_require_institution_raises_for_unknown_code():
    with pytest.raises(InstitutionNotFoundError) as exc_info:
        require_institution("999")

    assert exc_info.value.institution_number == "999"
    assert "999" in str(exc_info.value)


@pytest.mark.parametrize(
    "code,expected",
    [("001", True), ("999", True), ("01", False), ("0001", False), ("01X", False), ("١٢٣", False), (None, False)],
)
def test_is_institution_code(code, expected):
    assert is_institution_code(code) is expected


def test_get_branch_location_by_first_digit():
    assert get_branch_location("00011") == "British Columbia & Yukon"
    assert get_branch_location("50001") == "Quebec"
    assert get_branch_location("20001") == "Ontario (Toronto & Central Ontario)"


def test_get_branch_location_covers_every_leading_digit():
    for digit in "0123456789":
        assert get_branch_location(digit + "0000") == BRANCH_REGIONS[digit]
        assert get_branch_location(digit + "0000") != REGION_UNDETERMINED


@pytest.mark.parametrize("branch", [None, "", "1234", "123456", "1234X"])
def test_get_branch_location_malformed(branch):
    assert get_branch_location(branch) is None


def test_search_by_common_name():
    results = search_institutions("tangerine")

    assert [r.institution_number for r in results] == ["614"]


def test_search_is_case_insensitive():
    assert search_institutions("DESJARDINS") == search_institutions("desjardins")


def test_search_by_number_and_swift_code():
    assert get_institution("004") in search_institutions("004")
    assert [r.institution_number for r in search_institutions("ROYCCAT2")] == ["003"]


def test_search_by_headquarters():
    results = search_institutions("edmonton")

    assert [r.institution_number for r in results] == ["030"]


def test_search_by_type():
    results = search_institutions("credit union")

    assert {r.institution_number for r in results} == {"828", "837"}


def test_search_short_query_returns_nothing():
    assert search_institutions("t") == []
    assert search_institutions("  ") == []
    assert search_institutions(None) == []


def test_search_respects_limit():
    results = search_institutions("bank", limit=3)

    assert len(results) == 3


def test_search_min_length_is_configurable():
    assert search_institutions("td", min_length=3) == []
    assert get_institution("004") in search_institutions("td", min_length=2)


def test_by_province_includes_national_institutions():
    results = get_institutions_by_province("bc")
    codes = {r.institution_number for r in results}

    assert "828" in codes  # Vancity, BC only
    assert "001" in codes  # national
    assert "837" not in codes  # Meridian, Ontario only
    for record in results:
        assert ALL_PROVINCES in record.primary_provinces or "BC" in record.primary_provinces


def test_by_province_unknown_code_returns_national_only():
    results = get_institutions_by_province("ZZ")

    assert results
    assert all(ALL_PROVINCES in r.primary_provinces for r in results)


def test_by_type():
    caisses = get_institutions_by_type(InstitutionType.CAISSE_POPULAIRE)

    assert [r.institution_number for r in caisses] == ["815"]
    assert get_institutions_by_type("Credit Union") == get_institutions_by_type(InstitutionType.CREDIT_UNION)
    assert get_institutions_by_type(InstitutionType.TRUST_COMPANY) == []
