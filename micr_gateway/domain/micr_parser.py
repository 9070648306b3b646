"""MICR line tokenizer - best-effort field extraction from a raw E-13B line"""

import re
from typing import Any, List, Optional
from micr_gateway.domain.models import MicrSymbols, ParsedMicrLine

DEFAULT_MICR_SYMBOLS = MicrSymbols()

# Patterns run against the standardized line (glyphs replaced by t/a/o/d)
TRANSIT_PATTERN = re.compile(r"t(\d{9})", re.ASCII)
# t, a and o are field markers and terminate the account; d is the dash glyph
ACCOUNT_PATTERN = re.compile(r"o([0-9A-Zb-np-su-z\-]+)")
AMOUNT_PATTERN = re.compile(r"a([\d.,]+)a?", re.ASCII)
AMOUNT_FORMAT = re.compile(r"^\d+(\.\d{1,2})?$", re.ASCII)
TRANSACTION_CODE_PATTERN = re.compile(r"^(\d{1,4})", re.ASCII)
PREFIX_SEPARATOR = re.compile(r"[\s\-d]+")


def standardize_micr(raw: str, symbols: MicrSymbols = DEFAULT_MICR_SYMBOLS) -> str:
    """Replace each delimiter glyph with its canonical ASCII marker"""
    standardized = raw
    for glyph, marker in symbols.canonical_map().items():
        standardized = standardized.replace(glyph, marker)
    return standardized


def _none_if_empty(value: Optional[str]) -> Optional[str]:
    return value if value else None


def _split_serial_prefix(prefix: str) -> tuple[Optional[str], Optional[str]]:
    """
    Split the text before the transit field into (cheque number, auxiliary on-us).

    First numeric token is the cheque number and the remaining tokens form
    the auxiliary on-us field; a non-numeric prefix is kept whole as
    auxiliary on-us.
    """
    if not prefix:
        return None, None

    tokens = PREFIX_SEPARATOR.split(prefix)
    if tokens and tokens[0].isascii() and tokens[0].isdigit():
        return tokens[0], _none_if_empty("".join(tokens[1:]).strip())
    return None, prefix


def parse_micr_line(raw: Any, symbols: MicrSymbols = DEFAULT_MICR_SYMBOLS) -> ParsedMicrLine:
    """
    Parse a raw MICR line into transit, account, cheque, amount and code fields.

    Common Canadian personal cheque layout:
        CHEQUE [AUX] ⑆TRANSIT ⑈ACCOUNT [TRANSACTION CODE]

    Never raises. Fields that cannot be located are None and the reasons
    are collected in parsing_errors.
    """
    errors: List[str] = []

    if not raw or not isinstance(raw, str):
        errors.append("Input MICR string is invalid or empty.")
        return ParsedMicrLine(
            raw_micr_original=raw if isinstance(raw, str) else "",
            standardized_micr="",
            parsing_errors=errors,
        )

    standardized = standardize_micr(raw, symbols)

    transit_number = None
    transit_match = TRANSIT_PATTERN.search(standardized)
    if transit_match:
        transit_number = transit_match.group(1)
    else:
        errors.append("Transit symbol 't' or 9-digit transit number not found or not in expected format.")

    # A missing on-us marker is tolerated; some layouts omit it
    account_number = None
    account_match = ACCOUNT_PATTERN.search(standardized)
    if account_match:
        account_number = account_match.group(1).replace("-", "").replace("d", "")

    amount = None
    amount_match = AMOUNT_PATTERN.search(standardized)
    if amount_match:
        amount = amount_match.group(1).replace(",", ".")
        if not AMOUNT_FORMAT.match(amount):
            errors.append(f'Extracted amount "{amount}" is not in a recognized numeric format.')
            amount = None

    # Cheque number / auxiliary on-us precede the transit field
    if transit_match:
        prefix = standardized[: transit_match.start()].strip()
    elif account_match:
        prefix = standardized[: account_match.start()].strip()
    else:
        prefix = standardized.strip()
    check_number, auxiliary_on_us = _split_serial_prefix(prefix)

    # Transaction code trails the account field and its closing on-us marker
    if account_match:
        suffix = standardized[account_match.end():].lstrip("o").strip()
    elif transit_match:
        suffix = standardized[transit_match.end():].lstrip("t").strip()
    else:
        suffix = ""
    transaction_code = None
    code_match = TRANSACTION_CODE_PATTERN.match(suffix)
    if code_match:
        transaction_code = code_match.group(1)

    parsed = ParsedMicrLine(
        raw_micr_original=raw,
        standardized_micr=standardized,
        transit_number=_none_if_empty(transit_number),
        account_number=_none_if_empty(account_number),
        check_number=_none_if_empty(check_number),
        transaction_code=_none_if_empty(transaction_code),
        amount=_none_if_empty(amount),
        auxiliary_on_us=_none_if_empty(auxiliary_on_us),
        parsing_errors=errors,
    )

    recovered = [
        parsed.transit_number,
        parsed.account_number,
        parsed.check_number,
        parsed.transaction_code,
        parsed.amount,
        parsed.auxiliary_on_us,
    ]
    if not any(recovered):
        errors.append("Failed to extract any meaningful fields from the MICR line.")

    return parsed


def validate_account_format(account_number: Any) -> bool:
    """
    Generic sanity check for an account number.

    Account layouts are institution specific and not covered by CPA
    Standard 006, so only length (3-20) and charset are enforced.
    """
    if not isinstance(account_number, str) or not account_number.strip():
        return False
    if len(account_number) < 3 or len(account_number) > 20:
        return False
    return re.fullmatch(r"[0-9A-Za-z\-]*", re.sub(r"\s", "", account_number)) is not None
