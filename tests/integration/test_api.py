"""Integration tests for API endpoints"""

from fastapi.testclient import TestClient


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "service": "micr-gateway"}


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    client.post("/v1/micr/parse", json={"micr_line": "123⑆000110015⑈1234567⑈"})

    response = client.get("/metrics")
    assert response.status_code == 200
    assert "micr_parse_total" in response.text
    assert "institution_risk_score" in response.text


def test_request_id_is_echoed(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-abc-123"})

    assert response.headers["X-Request-ID"] == "req-abc-123"


def test_request_id_is_generated(client: TestClient):
    response = client.get("/health")

    assert response.headers["X-Request-ID"]


def test_parse_endpoint(client: TestClient):
    """Test POST /v1/micr/parse with a well-formed personal cheque line"""
    response = client.post("/v1/micr/parse", json={"micr_line": "123⑆000110015⑈1234567⑈"})

    assert response.status_code == 200
    data = response.json()
    assert data["parsed"]["transit_number"] == "000110015"
    assert data["parsed"]["account_number"] == "1234567"
    assert data["parsed"]["check_number"] == "123"
    assert data["parsed"]["parsing_errors"] == []
    assert data["transit_validation"]["is_valid"] is True
    assert data["transit_validation"]["institution_code"] == "001"
    assert data["branch_location"] == "British Columbia & Yukon"
    assert data["account_format_valid"] is True

    enrichment = data["enrichment"]
    assert enrichment["institution_validation"]["is_valid"] is True
    assert enrichment["institution_validation"]["risk_level"] == "low"
    assert enrichment["institution_validation"]["institution"]["primary_provinces"] == ["All Provinces"]
    assert enrichment["banking_context"]["bank_type"] == "Bank"
    assert enrichment["enhanced_data"]["institution_risk"]["risk_score"] == 5


def test_parse_endpoint_unparseable_line(client: TestClient):
    """Parsing problems are reported in the body, not as HTTP errors"""
    response = client.post("/v1/micr/parse", json={"micr_line": "   "})

    assert response.status_code == 200
    data = response.json()
    assert data["transit_validation"] is None
    assert data["account_format_valid"] is False
    assert "Failed to extract any meaningful fields from the MICR line." in data["parsed"]["parsing_errors"]
    assert data["enrichment"]["banking_context"] is None


def test_parse_endpoint_rejects_empty_line(client: TestClient):
    response = client.post("/v1/micr/parse", json={"micr_line": ""})

    assert response.status_code == 422


def test_parse_endpoint_rejects_missing_field(client: TestClient):
    response = client.post("/v1/micr/parse", json={})

    assert response.status_code == 422


def test_enhance_endpoint(client: TestClient):
    """Test POST /v1/micr/enhance with fields from an extraction service"""
    response = client.post(
        "/v1/micr/enhance",
        json={"transitNumber": "500018156", "accountNumber": "7654321", "payee": "J. Tremblay"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["original_micr"]["payee"] == "J. Tremblay"
    assert data["institution_validation"]["risk_level"] == "medium"
    assert data["banking_context"]["bank_name"] == "Desjardins Group"
    assert data["enhanced_data"]["payee"] == "J. Tremblay"
    assert data["enhanced_data"]["institution_risk"]["risk_score"] == 35
    assert data["enhanced_data"]["is_institution_valid_for_processing"] is True


def test_enhance_endpoint_without_institution(client: TestClient):
    response = client.post("/v1/micr/enhance", json={"accountNumber": "7654321"})

    assert response.status_code == 200
    data = response.json()
    assert data["institution_validation"]["is_valid"] is False
    assert data["institution_validation"]["institution"] is None
    assert data["banking_context"] is None


def test_enhance_endpoint_rejects_non_object(client: TestClient):
    response = client.post("/v1/micr/enhance", json=["000110015"])

    assert response.status_code == 422


def test_transit_endpoint_valid(client: TestClient):
    response = client.get("/v1/transit/200016148")

    assert response.status_code == 200
    data = response.json()
    assert data["validation"]["is_valid"] is True
    assert data["validation"]["branch_code"] == "20001"
    assert data["validation"]["institution_code"] == "614"
    assert data["branch_location"] == "Ontario (Toronto & Central Ontario)"


def test_transit_endpoint_checksum_failure(client: TestClient):
    response = client.get("/v1/transit/000010005")

    assert response.status_code == 200
    data = response.json()
    assert data["validation"]["is_format_valid"] is True
    assert data["validation"]["is_checksum_valid"] is False
    assert data["validation"]["error_messages"] == ["CPA checksum validation failed."]


def test_transit_endpoint_malformed(client: TestClient):
    response = client.get("/v1/transit/12AB")

    assert response.status_code == 200
    data = response.json()
    assert data["validation"]["is_format_valid"] is False
    assert data["validation"]["is_checksum_valid"] is None
    assert data["branch_location"] is None


def test_list_institutions(client: TestClient):
    response = client.get("/v1/institutions")

    assert response.status_code == 200
    data = response.json()
    assert data["query"] is None
    assert data["count"] == len(data["institutions"]) >= 13


def test_search_institutions(client: TestClient):
    response = client.get("/v1/institutions", params={"q": "tangerine"})

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 1
    assert data["institutions"][0]["institution_number"] == "614"


def test_search_institutions_by_province_and_type(client: TestClient):
    response = client.get("/v1/institutions", params={"province": "BC", "type": "Credit Union"})

    assert response.status_code == 200
    codes = [i["institution_number"] for i in response.json()["institutions"]]
    assert codes == ["828"]


def test_search_institutions_rejects_bad_filters(client: TestClient):
    assert client.get("/v1/institutions", params={"province": "BCX"}).status_code == 422
    assert client.get("/v1/institutions", params={"type": "Hedge Fund"}).status_code == 422


def test_institution_validation_endpoint(client: TestClient):
    response = client.get("/v1/institutions/016")

    assert response.status_code == 200
    data = response.json()
    assert data["is_valid"] is True
    assert data["risk_level"] == "medium"
    assert data["institution"]["status"] == "Acquired"
    assert data["institution"]["successor"] == "Royal Bank of Canada (003)"


def test_institution_validation_endpoint_unknown(client: TestClient):
    """Unknown codes are a normal outcome, not a 404"""
    response = client.get("/v1/institutions/999")

    assert response.status_code == 200
    data = response.json()
    assert data["is_valid"] is False
    assert data["risk_level"] == "high"


def test_institution_risk_endpoint(client: TestClient):
    response = client.get("/v1/institutions/815/risk")

    assert response.status_code == 200
    data = response.json()
    assert data["institution_number"] == "815"
    assert data["risk_level"] == "medium"
    assert data["assessment"]["risk_score"] == 35


def test_institution_risk_endpoint_not_found(client: TestClient):
    response = client.get("/v1/institutions/999/risk")

    assert response.status_code == 404
    assert response.json()["detail"] == "Institution 999 not found"
