"""Field normalizers and building-name cleansing for raw IOLP rows.

Raw spreadsheet rows are loosely typed: dates arrive as Excel serial day
counts, areas as numbers or numeric strings, and the asset name column often
concatenates a building name with a street address, suite or ZIP code.
These helpers turn them into the values stored in ``owned`` and ``leases``.

Everything here is pure; unparsable input is recovered locally (None for
dates, 0 for available area) and never raised.
"""

import math
import re
from datetime import date, datetime, timedelta
from typing import Any

from .schemas import ADDRESS_IN_NAME, ASSET_NAME, CLEANED_BUILDING_NAME


# =============================================================================
# Field Normalizers
# =============================================================================

# Excel serial day 0. Anchoring here (not 1900-01-01) absorbs the format's
# phantom 1900-02-29 for every serial after February 1900.
EXCEL_EPOCH = date(1899, 12, 30)


def convert_excel_date(value: Any) -> str | None:
    """Convert an Excel serial date to ``YYYY-MM-DD``.

    Only the integer part of the serial is used. Empty, zero, boolean,
    non-numeric and out-of-range input returns None. Cells that openpyxl
    already decoded as dates are returned as their ISO date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if not value or isinstance(value, bool):
        return None

    try:
        serial = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(serial):
        return None

    try:
        return (EXCEL_EPOCH + timedelta(days=int(serial))).isoformat()
    except OverflowError:
        return None


# Longest leading decimal number, e.g. "1500abc" -> "1500", "1,200" -> "1"
LEADING_NUMBER_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)", re.ASCII)


def parse_available_square_feet(value: Any) -> float:
    """Parse available square feet, defaulting to 0.

    Only the leading number is read, so trailing text is ignored and a
    thousands separator ends the number. No recorded vacancy is treated as
    a fully utilized building, so missing or unparsable values become 0
    rather than None.
    """
    if not value or isinstance(value, bool):
        return 0.0
    match = LEADING_NUMBER_RE.match(str(value))
    if not match:
        return 0.0
    parsed = float(match.group(1))
    return parsed if math.isfinite(parsed) else 0.0


# =============================================================================
# Address Detection
# =============================================================================

STREET_TYPES = (
    "st|street|ave|avenue|rd|road|blvd|boulevard|dr|drive|ln|lane|ct|court|way|pl|place"
)
UNIT_DESIGNATORS = "suite|ste|floor|fl|room|rm"

# Digits and word boundaries are ASCII-only throughout
ADDRESS_PATTERNS = [
    # "123 MAIN ST"
    re.compile(rf"\d+\s+[A-Za-z]+\s+({STREET_TYPES})", re.IGNORECASE | re.ASCII),
    # "123 NORTH MAIN ST"
    re.compile(rf"\d+\s+[A-Za-z]+\s+[A-Za-z]+\s+({STREET_TYPES})", re.IGNORECASE | re.ASCII),
    re.compile(r"\d{3,5}\s+[A-Za-z]", re.ASCII),
    re.compile(r",\s*\d{5}(-\d{4})?", re.ASCII),
    re.compile(rf"({UNIT_DESIGNATORS})\s*\d+", re.IGNORECASE | re.ASCII),
]


def has_address_in_name(name: Any) -> bool:
    """Best-effort check for an address embedded in an asset name."""
    if not name:
        return False
    text = str(name)
    return any(pattern.search(text) for pattern in ADDRESS_PATTERNS)


# =============================================================================
# Non-Address Scorer
# =============================================================================

BASE_SCORE = 10
LEADING_DIGIT_PENALTY = 15
STREET_TYPE_PENALTY = 10
POSTAL_CODE_PENALTY = 20
LANDMARK_BONUS = 15
CAPITALIZED_WORDS_BONUS = 5
SHORT_SEGMENT_PENALTY = 5

MIN_SEGMENT_LENGTH = 2
SHORT_SEGMENT_LENGTH = 5

LEADING_DIGIT_RE = re.compile(r"\d", re.ASCII)
STREET_WORD_RE = re.compile(rf"\b({STREET_TYPES})\b", re.IGNORECASE | re.ASCII)
POSTAL_CODE_RE = re.compile(r"\d{5}(-\d{4})?", re.ASCII)
LANDMARK_RE = re.compile(
    r"\b(center|centre|plaza|tower|building|complex|mall|square|park|place)\b",
    re.IGNORECASE | re.ASCII,
)
CAPITALIZED_WORD_RE = re.compile(r"\b[A-Z][a-z]+", re.ASCII)


def score_as_non_address(text: str | None) -> int:
    """Score how much a segment looks like a building name rather than an address.

    Higher is more name-like. The weights are hand-tuned:
    - leading digit, street-type word and ZIP code push the score down
    - landmark words ("plaza", "tower", ...) and Title Case words push it up
    - very short segments are penalized; under two characters scores 0
    """
    if not text or len(text) < MIN_SEGMENT_LENGTH:
        return 0

    score = BASE_SCORE

    if LEADING_DIGIT_RE.match(text):
        score -= LEADING_DIGIT_PENALTY
    if STREET_WORD_RE.search(text):
        score -= STREET_TYPE_PENALTY
    if POSTAL_CODE_RE.search(text):
        score -= POSTAL_CODE_PENALTY
    if LANDMARK_RE.search(text):
        score += LANDMARK_BONUS
    if len(CAPITALIZED_WORD_RE.findall(text)) > 1:
        score += CAPITALIZED_WORDS_BONUS
    if len(text) < SHORT_SEGMENT_LENGTH:
        score -= SHORT_SEGMENT_PENALTY

    return score


# =============================================================================
# Building Name Cleanser
# =============================================================================

# Checked in order; only the first delimiter found is split on
NAME_DELIMITERS = (" - ", " – ", ", ", " / ", ": ", " | ", " @ ", " at ")

MIN_CLEANED_LENGTH = 3

TRAILING_POSTAL_CODE_RE = re.compile(r",?\s*\d{5}(-\d{4})?\s*$", re.ASCII)
TRAILING_UNIT_RE = re.compile(
    rf",?\s*({UNIT_DESIGNATORS})\s*\d+\s*$", re.IGNORECASE | re.ASCII
)
WHITESPACE_RE = re.compile(r"\s+")
EDGE_PUNCTUATION_RE = re.compile(r"^[,\-\s]+|[,\-\s]+$")


def clean_building_name(name: Any) -> Any:
    """Recover a readable building name from an IOLP asset name.

    Examples:
    - "MAIN OFFICE - SUITE 100" → "MAIN OFFICE"
    - "BUILDING NAME, 12345" → "BUILDING NAME"
    - "JACOB K. JAVITS FR/CIT" → unchanged

    Empty input is returned as-is, and so is the original name whenever
    cleaning leaves fewer than three characters.
    """
    if not name:
        return name

    cleaned = str(name).strip()

    for delimiter in NAME_DELIMITERS:
        if delimiter in cleaned:
            parts = [part.strip() for part in cleaned.split(delimiter)]
            # max() keeps the earliest segment on ties
            cleaned = max(parts, key=score_as_non_address)
            break

    cleaned = TRAILING_POSTAL_CODE_RE.sub("", cleaned, count=1)
    cleaned = TRAILING_UNIT_RE.sub("", cleaned, count=1)
    cleaned = WHITESPACE_RE.sub(" ", cleaned).strip()
    cleaned = EDGE_PUNCTUATION_RE.sub("", cleaned)

    if len(cleaned) < MIN_CLEANED_LENGTH:
        return name

    return cleaned


# =============================================================================
# Row Processor
# =============================================================================


def process_row(row: dict[str, Any]) -> dict[str, Any]:
    """Copy a raw row and attach the cleaned name and address flag."""
    asset_name = row.get(ASSET_NAME) or ""
    return {
        **row,
        CLEANED_BUILDING_NAME: clean_building_name(asset_name),
        ADDRESS_IN_NAME: has_address_in_name(asset_name),
    }
