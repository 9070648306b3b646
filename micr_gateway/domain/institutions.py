"""Canadian financial institution directory - static reference data and lookups"""

from types import MappingProxyType
from typing import Any, List, Mapping, Optional
from micr_gateway.domain.exceptions import InstitutionNotFoundError
from micr_gateway.domain.models import (
    ComplianceLevel,
    InstitutionRecord,
    InstitutionStatus,
    InstitutionType,
    RegulatoryBody,
    RiskProfile,
)

ALL_PROVINCES = "All Provinces"
REGION_UNDETERMINED = "Region Undetermined"

_RECORDS = [
    InstitutionRecord(
        institution_number="001",
        name="Bank of Montreal",
        common_name="BMO Financial Group",
        short_name="BMO",
        type=InstitutionType.BANK,
        regulatory_body=RegulatoryBody.OSFI,
        status=InstitutionStatus.ACTIVE,
        cdic=True,
        deposit_insurance="CDIC",
        headquarters="Montreal, QC",
        customer_service="1-877-225-5266",
        primary_provinces=(ALL_PROVINCES,),
        branches=900,
        founded=1817,
        risk_profile=RiskProfile.LOW,
        compliance_level=ComplianceLevel.STANDARD,
        assets="$1.3T+",
        website="https://www.bmo.com",
        swift_code="BOFMCAM2",
        verification_phone="1-800-363-9992",
        fraud_reporting_phone="1-877-225-5266",
        special_notes="Canada's oldest bank. Strong commercial banking presence.",
    ),
    InstitutionRecord(
        institution_number="002",
        name="The Bank of Nova Scotia",
        common_name="Scotiabank",
        short_name="Scotia",
        type=InstitutionType.BANK,
        regulatory_body=RegulatoryBody.OSFI,
        status=InstitutionStatus.ACTIVE,
        cdic=True,
        deposit_insurance="CDIC",
        headquarters="Toronto, ON",
        customer_service="1-800-472-6842",
        primary_provinces=(ALL_PROVINCES,),
        branches=900,
        founded=1832,
        risk_profile=RiskProfile.LOW,
        compliance_level=ComplianceLevel.STANDARD,
        assets="$1.4T+",
        website="https://www.scotiabank.com",
        swift_code="NOSCCATT",
        verification_phone="1-800-4SCOTIA",
        fraud_reporting_phone="1-800-472-6842",
        special_notes="Significant international presence, particularly in Latin America.",
    ),
    InstitutionRecord(
        institution_number="003",
        name="Royal Bank of Canada",
        common_name="RBC Royal Bank",
        short_name="RBC",
        type=InstitutionType.BANK,
        regulatory_body=RegulatoryBody.OSFI,
        status=InstitutionStatus.ACTIVE,
        cdic=True,
        deposit_insurance="CDIC",
        headquarters="Toronto, ON",
        customer_service="1-800-769-2511",
        primary_provinces=(ALL_PROVINCES,),
        branches=1200,
        founded=1864,
        risk_profile=RiskProfile.LOW,
        compliance_level=ComplianceLevel.STANDARD,
        assets="$2.0T+",
        website="https://www.rbcroyalbank.com",
        swift_code="ROYCCAT2",
        verification_phone="1-800-769-2566",
        fraud_reporting_phone="1-800-769-2511",
        special_notes="Canada's largest bank by market capitalization. Acquired HSBC Bank Canada in March 2024.",
    ),
    InstitutionRecord(
        institution_number="004",
        name="The Toronto-Dominion Bank",
        common_name="TD Canada Trust",
        short_name="TD",
        type=InstitutionType.BANK,
        regulatory_body=RegulatoryBody.OSFI,
        status=InstitutionStatus.ACTIVE,
        cdic=True,
        deposit_insurance="CDIC",
        headquarters="Toronto, ON",
        customer_service="1-866-222-3456",
        primary_provinces=(ALL_PROVINCES,),
        branches=1000,
        founded=1955,
        risk_profile=RiskProfile.LOW,
        compliance_level=ComplianceLevel.STANDARD,
        assets="$1.9T+",
        website="https://www.td.com",
        swift_code="TDOMCATTTOR",
        verification_phone="1-800-983-2265",
        fraud_reporting_phone="1-866-222-3456",
        special_notes="Large U.S. retail presence. Known for extended customer service hours.",
    ),
    InstitutionRecord(
        institution_number="006",
        name="National Bank of Canada",
        common_name="National Bank",
        short_name="NBC",
        type=InstitutionType.BANK,
        regulatory_body=RegulatoryBody.OSFI,
        status=InstitutionStatus.ACTIVE,
        cdic=True,
        deposit_insurance="CDIC",
        headquarters="Montreal, QC",
        customer_service="1-888-483-5628",
        primary_provinces=("QC", "ON", "NB", "MB", "AB", "BC"),
        branches=370,
        founded=1859,
        risk_profile=RiskProfile.LOW,
        compliance_level=ComplianceLevel.STANDARD,
        assets="$400B+",
        website="https://www.nbc.ca",
        swift_code="BNDCCAMMINT",
        verification_phone="1-844-394-8043",
        fraud_reporting_phone="1-888-483-5628",
        special_notes="Sixth largest bank in Canada. Strong presence in Quebec.",
    ),
    InstitutionRecord(
        institution_number="010",
        name="Canadian Imperial Bank of Commerce",
        common_name="CIBC",
        short_name="CIBC",
        type=InstitutionType.BANK,
        regulatory_body=RegulatoryBody.OSFI,
        status=InstitutionStatus.ACTIVE,
        cdic=True,
        deposit_insurance="CDIC",
        headquarters="Toronto, ON",
        customer_service="1-800-465-2422",
        primary_provinces=(ALL_PROVINCES,),
        branches=1000,
        founded=1961,
        risk_profile=RiskProfile.LOW,
        compliance_level=ComplianceLevel.STANDARD,
        assets="$950B+",
        website="https://www.cibc.com",
        swift_code="CIBCCATT",
        verification_phone="1-800-465-2422",
        fraud_reporting_phone="1-800-465-2422",
        special_notes="Strong focus on technology and innovation.",
    ),
    InstitutionRecord(
        institution_number="016",
        name="HSBC Bank Canada",
        common_name="HSBC Canada (Acquired by RBC)",
        short_name="HSBC CA",
        type=InstitutionType.BANK,
        regulatory_body=RegulatoryBody.OSFI,
        status=InstitutionStatus.ACQUIRED,
        cdic=True,
        deposit_insurance="CDIC (Transferred to RBC)",
        headquarters="Vancouver, BC",
        customer_service="Refer to RBC",
        primary_provinces=("BC", "ON", "AB", "QC"),
        branches=0,
        founded=1981,
        risk_profile=RiskProfile.MEDIUM,
        compliance_level=ComplianceLevel.ENHANCED,
        assets="$120B+",
        website="https://www.hsbc.ca",
        swift_code="HKBCCATT",
        special_notes=(
            "Operations fully merged into Royal Bank of Canada as of March 2024. "
            "Cheques drawn on HSBC Canada accounts are now processed by RBC."
        ),
        successor="Royal Bank of Canada (003)",
    ),
    InstitutionRecord(
        institution_number="030",
        name="Canadian Western Bank",
        common_name="CWB Financial Group",
        short_name="CWB",
        type=InstitutionType.BANK,
        regulatory_body=RegulatoryBody.OSFI,
        status=InstitutionStatus.ACTIVE,
        cdic=True,
        deposit_insurance="CDIC",
        headquarters="Edmonton, AB",
        customer_service="1-866-441-2921",
        primary_provinces=("BC", "AB", "SK", "MB", "ON"),
        branches=40,
        founded=1984,
        risk_profile=RiskProfile.MEDIUM,
        compliance_level=ComplianceLevel.STANDARD,
        assets="$40B+",
        website="https://www.cwbank.com",
        swift_code="CWCBCATT",
        special_notes="Business banking focus in Western Canada. Acquisition by National Bank announced.",
    ),
    InstitutionRecord(
        institution_number="039",
        name="Laurentian Bank of Canada",
        common_name="Laurentian Bank",
        short_name="LBC",
        type=InstitutionType.BANK,
        regulatory_body=RegulatoryBody.OSFI,
        status=InstitutionStatus.ACTIVE,
        cdic=True,
        deposit_insurance="CDIC",
        headquarters="Montreal, QC",
        customer_service="1-800-252-1846",
        primary_provinces=("QC", "ON"),
        branches=55,
        founded=1846,
        risk_profile=RiskProfile.MEDIUM,
        compliance_level=ComplianceLevel.STANDARD,
        assets="$50B+",
        website="https://www.laurentianbank.ca",
        swift_code="BLCMCAMM",
        special_notes="Retail network concentrated in Quebec.",
    ),
    InstitutionRecord(
        institution_number="614",
        name="Tangerine Bank",
        common_name="Tangerine",
        short_name="Tangerine",
        type=InstitutionType.BANK,
        regulatory_body=RegulatoryBody.OSFI,
        status=InstitutionStatus.ACTIVE,
        cdic=True,
        deposit_insurance="CDIC",
        headquarters="Toronto, ON",
        customer_service="1-888-826-4374",
        primary_provinces=(ALL_PROVINCES,),
        branches=0,
        founded=1997,
        risk_profile=RiskProfile.LOW,
        compliance_level=ComplianceLevel.STANDARD,
        assets="$45B+",
        website="https://www.tangerine.ca",
        swift_code="INGCDSM1",
        verification_phone="1-888-826-4374",
        fraud_reporting_phone="1-888-826-4374",
        special_notes="Direct bank, subsidiary of Scotiabank. No physical branches.",
    ),
    InstitutionRecord(
        institution_number="815",
        name="La Caisse Centrale Desjardins du Québec",
        common_name="Desjardins Group",
        short_name="Desjardins",
        type=InstitutionType.CAISSE_POPULAIRE,
        regulatory_body=RegulatoryBody.PROVINCIAL,
        status=InstitutionStatus.ACTIVE,
        cdic=False,
        deposit_insurance="AMF (Quebec)",
        headquarters="Lévis, QC",
        customer_service="1-800-224-7737",
        primary_provinces=("QC", "ON"),
        branches=200,
        founded=1900,
        risk_profile=RiskProfile.LOW,
        compliance_level=ComplianceLevel.ENHANCED,
        assets="$420B+",
        website="https://www.desjardins.com",
        swift_code="CCDQCAMM",
        special_notes=(
            "Largest cooperative financial group in Canada. Individual caisses carry "
            "their own transit numbers. Regulated in Quebec by the AMF."
        ),
    ),
    InstitutionRecord(
        institution_number="828",
        name="Vancouver City Savings Credit Union",
        common_name="Vancity",
        short_name="Vancity",
        type=InstitutionType.CREDIT_UNION,
        regulatory_body=RegulatoryBody.PROVINCIAL,
        status=InstitutionStatus.ACTIVE,
        cdic=False,
        deposit_insurance="CUDIC (BC)",
        headquarters="Vancouver, BC",
        customer_service="1-888-826-2489",
        primary_provinces=("BC",),
        branches=59,
        founded=1946,
        risk_profile=RiskProfile.LOW,
        compliance_level=ComplianceLevel.STANDARD,
        assets="$35B+",
        website="https://www.vancity.com",
        swift_code="CUCXCATTVAN",
        special_notes="Largest credit union in Canada by membership outside Quebec. Deposits fully guaranteed in BC.",
    ),
    InstitutionRecord(
        institution_number="837",
        name="Meridian Credit Union Limited",
        common_name="Meridian",
        short_name="Meridian CU",
        type=InstitutionType.CREDIT_UNION,
        regulatory_body=RegulatoryBody.PROVINCIAL,
        status=InstitutionStatus.ACTIVE,
        cdic=False,
        deposit_insurance="FSRA (Ontario)",
        headquarters="Toronto, ON",
        customer_service="1-866-592-2226",
        primary_provinces=("ON",),
        branches=90,
        founded=2005,
        risk_profile=RiskProfile.LOW,
        compliance_level=ComplianceLevel.STANDARD,
        assets="$30B+",
        website="https://www.meridiancu.ca",
        special_notes="Ontario's largest credit union. Deposit insurance provided by FSRA.",
    ),
]

# Read-only after import
INSTITUTION_DIRECTORY: Mapping[str, InstitutionRecord] = MappingProxyType(
    {record.institution_number: record for record in _RECORDS}
)

# First digit of the 5-digit branch code -> approximate region (display only)
BRANCH_REGIONS: Mapping[str, str] = MappingProxyType(
    {
        "0": "British Columbia & Yukon",
        "1": "Western Canada (Alberta, Saskatchewan, Manitoba)",
        "2": "Ontario (Toronto & Central Ontario)",
        "3": "Ontario (Southwestern & Eastern Ontario)",
        "4": "Ontario (Northern Ontario & other regions)",
        "5": "Quebec",
        "6": "Atlantic Canada (Nova Scotia, New Brunswick)",
        "7": "Atlantic Canada (PEI, Newfoundland & Labrador)",
        "8": "Atlantic Canada (Other regions)",
        "9": "Territories (NWT, Nunavut) & specialized branches",
    }
)


def is_institution_code(code: Any) -> bool:
    """True for exactly three ASCII digits"""
    return isinstance(code, str) and len(code) == 3 and code.isascii() and code.isdigit()


def get_institution(code: Any) -> Optional[InstitutionRecord]:
    if not isinstance(code, str):
        return None
    return INSTITUTION_DIRECTORY.get(code)


def require_institution(code: Any) -> InstitutionRecord:
    """
    Lookup that fails loudly, for callers that cannot work without a record.

    Raises:
        InstitutionNotFoundError: code malformed or not in the directory
    """
    institution = get_institution(code)
    if institution is None:
        raise InstitutionNotFoundError(str(code))
    return institution


def get_branch_location(branch_code: Any) -> Optional[str]:
    """Approximate region for a 5-digit branch code, None if malformed"""
    if not (isinstance(branch_code, str) and len(branch_code) == 5 and branch_code.isascii() and branch_code.isdigit()):
        return None
    return BRANCH_REGIONS.get(branch_code[0], REGION_UNDETERMINED)


def search_institutions(query: str, limit: int = 20, min_length: int = 2) -> List[InstitutionRecord]:
    """
    Case-insensitive search over names, number, headquarters, SWIFT code and type.

    Queries shorter than min_length return no results.
    """
    term = (query or "").strip().lower()
    if len(term) < min_length:
        return []

    compact_term = term.replace(" ", "")
    matches = []
    for institution in INSTITUTION_DIRECTORY.values():
        haystack = [
            institution.name.lower(),
            institution.common_name.lower(),
            institution.short_name.lower(),
            institution.institution_number,
            institution.headquarters.lower(),
            (institution.swift_code or "").lower(),
        ]
        if any(term in value for value in haystack) or compact_term in institution.type.value.lower().replace(" ", ""):
            matches.append(institution)

    return matches[:limit]


def get_institutions_by_province(province: str) -> List[InstitutionRecord]:
    """National institutions plus those operating in the given 2-letter province"""
    province_upper = (province or "").strip().upper()
    return [
        institution
        for institution in INSTITUTION_DIRECTORY.values()
        if ALL_PROVINCES in institution.primary_provinces
        or any(p.upper() == province_upper for p in institution.primary_provinces)
    ]


def get_institutions_by_type(institution_type: InstitutionType | str) -> List[InstitutionRecord]:
    return [
        institution
        for institution in INSTITUTION_DIRECTORY.values()
        if institution.type == institution_type
    ]
