"""
Cell Values

Tagged union for dataset cells plus the heuristics that coerce raw text
into it. Each recogniser is a small named function so that its precedence
can be tested on its own.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Union
import math
import re
import warnings

import pandas as pd


@dataclass(frozen=True)
class Numeric:
    value: float


@dataclass(frozen=True)
class Temporal:
    value: datetime


@dataclass(frozen=True)
class Text:
    value: str


@dataclass(frozen=True)
class Boolean:
    value: bool


@dataclass(frozen=True)
class Missing:
    def __repr__(self) -> str:
        return "MISSING"


MISSING = Missing()

Scalar = Union[Numeric, Temporal, Text, Boolean, Missing]

_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_BOOLEAN_WORDS = {"true": True, "false": False}

# Shapes accepted as dates. Anything else is never handed to the date parser,
# which would otherwise accept bare month names or small integers.
_DATE_PATTERNS = [
    re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$"),
    re.compile(r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?$"),
    re.compile(r"^\d{4}/\d{1,2}/\d{1,2}$"),
    re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$"),
    re.compile(r"^\d{1,2}/\d{1,2}/\d{2}$"),
    re.compile(r"^[A-Za-z]{3,9}\.? \d{1,2},? \d{4}$"),
    re.compile(r"^\d{1,2} [A-Za-z]{3,9}\.? \d{4}$"),
]


def parse_number(text: str) -> Optional[float]:
    """Return the finite float for a decimal literal, or None."""
    text = text.strip()
    if not _NUMBER_RE.match(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number


def parse_boolean(text: str) -> Optional[bool]:
    return _BOOLEAN_WORDS.get(text.strip().lower())


def looks_like_date(text: str) -> bool:
    text = text.strip()
    return any(pattern.match(text) for pattern in _DATE_PATTERNS)


def parse_date(text: str) -> Optional[datetime]:
    """Parse a date-shaped string, returning None when it is not a real date."""
    if not looks_like_date(text):
        return None
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        parsed = pd.to_datetime(text.strip(), errors="coerce")
    if parsed is None or pd.isna(parsed):
        return None
    return normalize_datetime(parsed.to_pydatetime())


def normalize_datetime(moment: datetime) -> datetime:
    """Aware datetimes are shifted to UTC and made naive so that they compare."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def coerce_scalar(raw: Optional[str]) -> Scalar:
    """
    Coerce a raw cell into a Scalar.

    Precedence: numeric, boolean, date, text. Blank cells are Missing.
    """
    if raw is None:
        return MISSING
    text = raw.strip()
    if not text:
        return MISSING

    number = parse_number(text)
    if number is not None:
        return Numeric(number)

    flag = parse_boolean(text)
    if flag is not None:
        return Boolean(flag)

    moment = parse_date(text)
    if moment is not None:
        return Temporal(moment)

    return Text(text)


def is_missing(value: Scalar) -> bool:
    if isinstance(value, Missing):
        return True
    return isinstance(value, Text) and not value.value.strip()


def as_number(value: Scalar) -> Optional[float]:
    """Read a scalar as a finite number if it is one (or is text spelling one)."""
    if isinstance(value, Numeric):
        return value.value if math.isfinite(value.value) else None
    if isinstance(value, Text):
        return parse_number(value.value)
    return None


def as_datetime(value: Scalar) -> Optional[datetime]:
    if isinstance(value, Temporal):
        return value.value
    if isinstance(value, Text):
        return parse_date(value.value)
    return None


def format_temporal(moment: datetime) -> str:
    """Calendar-day string, or full ISO form when a time component is present."""
    if moment.tzinfo is None and moment.time() == datetime.min.time():
        return moment.date().isoformat()
    return moment.isoformat()


def format_number(number: float) -> Union[int, float]:
    if number.is_integer() and abs(number) < 2 ** 53:
        return int(number)
    return number


def to_display(value: Scalar) -> str:
    """String form used for text statistics and labels."""
    if isinstance(value, Numeric):
        return str(format_number(value.value))
    if isinstance(value, Temporal):
        return format_temporal(value.value)
    if isinstance(value, Boolean):
        return "true" if value.value else "false"
    if isinstance(value, Text):
        return value.value
    return ""


def to_json_value(value: Scalar) -> Any:
    if isinstance(value, Numeric):
        return format_number(value.value)
    if isinstance(value, Temporal):
        return format_temporal(value.value)
    if isinstance(value, Boolean):
        return value.value
    if isinstance(value, Text):
        return value.value
    return None
