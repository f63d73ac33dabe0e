# chgateway/core/coercion.py
"""
COERCION MODULE - Turn loosely typed ClickHouse rows into fixed-type values

Purpose:
    1. Classify every JSON value by kind before touching it
    2. Convert numeric columns from either a quoted string or a bare number
    3. Stringify "anything" columns whose upstream type cannot be trusted
    4. Never raise: a bad field becomes a zero value, the row survives

Data Flow:
    raw row (dict from the JSON envelope) → classify() → to_integer() / to_text() / stringify()
                                                              ↓
                                                   normalized dict → schemas.Record

Why this matters:
    - ClickHouse quotes 64-bit integers in FORMAT JSON ("id": "42") but not
      32-bit ones ("id_card": 42), and the setting can be flipped per query
    - Columns declared String may still hold numbers, booleans or JSON blobs
      depending on who inserted them
    - One corrupt cell must not blank out the whole page
"""

import json
import math
import re
from enum import Enum
from typing import Any, Dict, Mapping, Optional


# ============================================================================
# STEP 1: CLASSIFY THE WIRE VALUE
# ============================================================================


class ValueKind(str, Enum):
    NULL = "null"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"


def classify(value: Any) -> ValueKind:
    """
    Tag a decoded JSON value with its kind.

    bool is checked before numbers because True/False are ints in Python.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    if isinstance(value, Mapping):
        return ValueKind.OBJECT
    return ValueKind.UNKNOWN


# ============================================================================
# STEP 2: NUMERIC COLUMNS
# ============================================================================

INT64_MIN, INT64_MAX = -(1 << 63), (1 << 63) - 1
INT32_MIN, INT32_MAX = -(1 << 31), (1 << 31) - 1

# Plain base-10: optional sign, ASCII digits only (no spaces, no underscores)
_INTEGER_PATTERN = re.compile(r"([+-]?)([0-9]+)")

# More significant digits than this can never fit in 64 bits
_MAX_DIGITS = 19

# Stand-in for "too many digits"; clamped like any other out-of-range value
_OVERFLOW = 1 << 64


def _parse_decimal(text: str) -> Optional[int]:
    """Return the integer written in `text`, or None if it is not a plain integer."""
    match = _INTEGER_PATTERN.fullmatch(text)
    if not match:
        return None

    sign, digits = match.groups()
    digits = digits.lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        number = _OVERFLOW
    else:
        number = int(digits)
    return -number if sign == "-" else number


def to_integer(value: Any, bits: int = 64) -> int:
    """
    Convert a text or numeric wire value to a signed integer of `bits` width.

    Handles:
        - "42", "-7", "+3", "007"  → parsed as base 10
        - 42, 3.9, -3.9            → truncated toward zero
        - anything else            → 0
        - values outside the signed range of `bits` → clamped to that range

    Examples:
        to_integer("42") → 42
        to_integer("abc") → 0
        to_integer(3.9) → 3
        to_integer("3000000000", bits=32) → 2147483647
    """
    kind = classify(value)

    if kind is ValueKind.TEXT:
        number = _parse_decimal(value)
    elif kind is ValueKind.NUMBER:
        if isinstance(value, float):
            number = math.trunc(value) if math.isfinite(value) else None
        else:
            number = value
    else:
        number = None

    if number is None:
        return 0

    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return max(low, min(number, high))


# ============================================================================
# STEP 3: TEXT COLUMNS
# ============================================================================


def to_text(value: Any) -> str:
    """Copy a text value verbatim; anything that is not text becomes ""."""
    if classify(value) is ValueKind.TEXT:
        return value
    return ""


def _format_number(value: Any) -> str:
    if isinstance(value, float):
        # 1000.0 → "1000", like the JSON it came from; 1e21 and up keep the exponent
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    return str(value)


def stringify(value: Any) -> str:
    """
    Render any wire value as text.

    Used for the affiliation/additional_info columns where the upstream
    schema is not trustworthy: accept anything, never fail.

    Examples:
        None → ""
        True → "true"
        123 → "123"
        {"a": [1, 2]} → '{"a":[1,2]}'
    """
    kind = classify(value)

    if kind is ValueKind.NULL:
        return ""
    if kind is ValueKind.TEXT:
        return value
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        return _format_number(value)
    if kind in (ValueKind.ARRAY, ValueKind.OBJECT):
        return json.dumps(
            value, ensure_ascii=False, separators=(",", ":"), default=str
        )
    return str(value)


# ============================================================================
# STEP 4: WHOLE ROW
# ============================================================================


def coerce_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Normalize one raw row into the keyword arguments of schemas.Record.

    Missing keys are treated like null, so an empty row gives a record of
    zero values.
    """
    return {
        "identifier": to_integer(row.get("id"), bits=64),
        "username": to_text(row.get("name")),
        "score": to_integer(row.get("id_card"), bits=32),
        "telephone": to_text(row.get("phone")),
        "affiliation_code": stringify(row.get("affiliation")),
        "extra_code": stringify(row.get("additional_info")),
    }
