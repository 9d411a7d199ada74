import locale
import re
from enum import Enum
from typing import Any, Callable, Dict, Optional, Tuple

from sort_errors import UnknownComparatorError

SortPair = Tuple[str, Any]
Comparator = Callable[[SortPair, SortPair], int]


class ComparatorName(str, Enum):
    ALPHA_NUMERIC = "alpha_numeric"
    DATE_DAY_FIRST = "date_day_first"
    DATE_MONTH_FIRST = "date_month_first"
    NUMBER = "number"
    NUMBER_COMMA_DECIMAL = "number_comma_decimal"


# Names used by older header tags (class attributes on HTML tables).
LEGACY_NAMES: Dict[str, ComparatorName] = {
    "alphaNumeric": ComparatorName.ALPHA_NUMERIC,
    "sortDate": ComparatorName.DATE_DAY_FIRST,
    "sortDate_American": ComparatorName.DATE_MONTH_FIRST,
    "sortNumberJS": ComparatorName.NUMBER,
    "sortNumber_nonJS": ComparatorName.NUMBER_COMMA_DECIMAL,
}

_LEADING_ZERO_RE = re.compile(r"^0+")
_FLOAT_PREFIX_RE = re.compile(
    r"^[+-]?(?:Infinity|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)",
    re.ASCII,
)
_NOT_PERIOD_NUMBER_RE = re.compile(r"[^\d.-]+", re.ASCII)
_NOT_COMMA_NUMBER_RE = re.compile(r"[^\d,-]+", re.ASCII)


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def _parse_float_prefix(text: str) -> Optional[float]:
    match = _FLOAT_PREFIX_RE.match(text.lstrip())
    if not match:
        return None
    token = match.group(0)
    if token.lstrip("+-") == "Infinity":
        return float("-inf") if token.startswith("-") else float("inf")
    return float(token)


def _collate(a: str, b: str) -> int:
    try:
        return locale.strcoll(a, b)
    except ValueError:
        # strcoll rejects embedded NUL characters
        return _sign(a, b)


def _alpha_numeric_value(text: str):
    # "007" must stay distinct from "7", so leading zeros keep the raw text.
    if _LEADING_ZERO_RE.match(text):
        return text
    if not text:
        return 0.0
    number = _parse_float_prefix(text)
    return text if number is None else number


def alpha_numeric(a: SortPair, b: SortPair) -> int:
    value_a = _alpha_numeric_value(a[0])
    value_b = _alpha_numeric_value(b[0])
    a_is_text = isinstance(value_a, str)
    b_is_text = isinstance(value_b, str)

    if a_is_text and b_is_text:
        return _sign(_collate(value_a, value_b), 0)
    if not a_is_text and not b_is_text:
        return _sign(value_a, value_b)
    # numbers sort before text
    return 1 if a_is_text else -1


def _day_first_key(text: str) -> str:
    return text[6:10] + text[3:5] + text[0:2]


def _month_first_key(text: str) -> str:
    return text[6:10] + text[0:2] + text[3:5]


def date_day_first(a: SortPair, b: SortPair) -> int:
    return _sign(_day_first_key(a[0]), _day_first_key(b[0]))


def date_month_first(a: SortPair, b: SortPair) -> int:
    return _sign(_month_first_key(a[0]), _month_first_key(b[0]))


def _to_number(text: str) -> float:
    if not text:
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


def _period_decimal_value(text: str) -> float:
    return _to_number(_NOT_PERIOD_NUMBER_RE.sub("", text))


def _comma_decimal_value(text: str) -> float:
    digits = _NOT_COMMA_NUMBER_RE.sub("", text)
    return _to_number(digits.replace(",", ".", 1))


def number(a: SortPair, b: SortPair) -> int:
    return _sign(_period_decimal_value(a[0]), _period_decimal_value(b[0]))


def number_comma_decimal(a: SortPair, b: SortPair) -> int:
    return _sign(_comma_decimal_value(a[0]), _comma_decimal_value(b[0]))


COMPARATORS: Dict[ComparatorName, Comparator] = {
    ComparatorName.ALPHA_NUMERIC: alpha_numeric,
    ComparatorName.DATE_DAY_FIRST: date_day_first,
    ComparatorName.DATE_MONTH_FIRST: date_month_first,
    ComparatorName.NUMBER: number,
    ComparatorName.NUMBER_COMMA_DECIMAL: number_comma_decimal,
}


def lookup_name(name) -> Optional[ComparatorName]:
    if isinstance(name, ComparatorName):
        return name
    if not isinstance(name, str):
        return None
    text = name.strip()
    try:
        return ComparatorName(text)
    except ValueError:
        return LEGACY_NAMES.get(text)


def resolve_name(name) -> ComparatorName:
    resolved = lookup_name(name)
    if resolved is None:
        raise UnknownComparatorError(name)
    return resolved


def comparator_by_name(name) -> Comparator:
    return COMPARATORS[resolve_name(name)]


def parse_override_tag(tag: Optional[str]) -> Optional[ComparatorName]:
    """First whitespace-separated token of ``tag`` naming a comparator, if any.

    Lets collaborators holding a free-form tag string (for example an HTML
    ``class`` attribute such as ``"wide sortNumber_nonJS"``) turn it into a
    typed override.
    """
    if not tag:
        return None
    for token in str(tag).split():
        resolved = lookup_name(token)
        if resolved is not None:
            return resolved
    return None
