import re
from typing import Optional, Union

from loguru import logger

from comparators import ComparatorName, lookup_name

# currency, plain number or percentage: "-$1,234.50", "12 %", "R$ 3.99"
# ASCII digits only; \s also matches non-breaking spaces
_NUMBER_RE = re.compile(r"^-?[^0-9]*?[0-9,.]+[\s%]*?$")
# d/m/yyyy, dd.mm.yy, mm-dd-yyyy ...
_DATE_RE = re.compile(r"^(\d\d?)[/.-](\d\d?)[/.-]((\d\d)?\d\d)$", re.ASCII)


def classify(
    sample: str, override: Optional[Union[ComparatorName, str]] = None
) -> ComparatorName:
    """Pick the comparator for a column from its first data cell.

    An override naming a registry entry always wins. Otherwise numbers,
    currencies and percentages get the period-decimal number comparator,
    dates get a day-first or month-first comparator, and anything else falls
    back to alpha-numeric ordering. When both date groups are 12 or less the
    column is assumed to be day-first.
    """
    if override is not None and override != "":
        resolved = lookup_name(override)
        if resolved is not None:
            return resolved
        logger.warning("Ignoring unknown comparator override {!r}", override)

    text = sample or ""
    if not text:
        return ComparatorName.ALPHA_NUMERIC

    if _NUMBER_RE.match(text):
        return ComparatorName.NUMBER

    date = _DATE_RE.match(text)
    if date:
        if int(date.group(1)) > 12:
            return ComparatorName.DATE_DAY_FIRST
        if int(date.group(2)) > 12:
            return ComparatorName.DATE_MONTH_FIRST
        return ComparatorName.DATE_DAY_FIRST

    return ComparatorName.ALPHA_NUMERIC
