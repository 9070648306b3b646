"""Prometheus metrics for monitoring MICR parse quality and institution risk"""

from prometheus_client import Counter, Histogram

# MICR parsing
micr_parse_counter = Counter(
    "micr_parse_total",
    "MICR lines parsed",
    ["outcome"],  # transit_found | transit_missing
)

transit_validation_counter = Counter(
    "transit_validation_total",
    "Transit numbers validated",
    ["outcome"],  # valid | invalid
)

# Institution checks
institution_validation_counter = Counter(
    "institution_validation_total",
    "Institution validations by resulting risk level",
    ["risk_level"],  # low | medium | high
)

enrichment_counter = Counter(
    "micr_enrichment_total",
    "Enrichment requests by processing eligibility",
    ["outcome"],  # eligible | ineligible
)

institution_risk_score_histogram = Histogram(
    "institution_risk_score",
    "Distribution of institution risk scores (0-100)",
    buckets=[5, 10, 20, 30, 45, 60, 80, 100],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_micr_parse(transit_found: bool) -> None:
    micr_parse_counter.labels(outcome="transit_found" if transit_found else "transit_missing").inc()


def record_transit_validation(is_valid: bool) -> None:
    transit_validation_counter.labels(outcome="valid" if is_valid else "invalid").inc()


def record_institution_validation(risk_level: str) -> None:
    institution_validation_counter.labels(risk_level=risk_level).inc()


def record_enrichment(valid_for_processing: bool, risk_score: int | None) -> None:
    """Record enrichment eligibility and, when an institution matched, its score"""
    enrichment_counter.labels(outcome="eligible" if valid_for_processing else "ineligible").inc()
    if risk_score is not None:
        institution_risk_score_histogram.observe(risk_score)
