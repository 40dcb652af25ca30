"""Dewey Decimal code to subject category resolution."""

import math
import re
from types import MappingProxyType

# Sub-class overrides, keyed by the 3-digit prefix of the code.
CATEGORY_OVERRIDES = MappingProxyType(
    {
        "005": "Technology & Computer Science",
        "153": "Cognitive Psychology",
        "155": "Developmental Psychology",
        "158": "Applied Psychology & Self-Help",
        "302": "Social Influences & Behaviour",
        "332": "Finance & Economics",
        "658": "Business & Management",
        "745": "Design & Decorative Arts",
        "909": "World History",
        "921": "Biography & Memoir",
    }
)

# Broad hundred-class divisions as (exclusive upper bound, label).
HUNDRED_CLASSES = (
    (100, "General & Computer Science"),
    (200, "Philosophy & Psychology"),
    (300, "Religion & Theology"),
    (400, "Social Sciences"),
    (500, "Language & Linguistics"),
    (600, "Pure Science"),
    (700, "Applied Science & Technology"),
    (800, "Arts & Recreation"),
    (900, "Literature"),
)
DEFAULT_CATEGORY = "History, Geography & Biography"

_LEADING_NUMBER = re.compile(r"\s*([+-]?)(\d*)(?:\.(\d*))?(?:[eE]([+-]?\d+))?")


def _parse(code: str) -> tuple[float, str | None]:
    """
    Parse the leading decimal number of ``code``.

    Returns the numeric value (NaN when there is none) and the 3-digit
    prefix of the integer part, or None when no prefix applies. Plain
    codes keep their written digits ("0051" -> "005"); codes with an
    exponent take the prefix from the integer part of their value.
    """
    match = _LEADING_NUMBER.match(code)
    sign, integer, fraction, exponent = match.groups()
    if not integer and not fraction:
        return math.nan, None

    value = float(f"{sign}{integer or '0'}.{fraction or '0'}e{exponent or '0'}")
    if sign == "-" or not math.isfinite(value):
        return value, None
    if exponent is not None:
        integer = str(int(value))
    return value, (integer or "0").zfill(3)[:3]


def classify(code: str) -> str:
    """
    Map a Dewey Decimal code such as ``"658.4"`` to a category label.

    Never fails: a malformed code parses to NaN, fails every range
    comparison and lands in the final history/geography class.
    """
    value, prefix = _parse(str(code))
    if prefix in CATEGORY_OVERRIDES:
        return CATEGORY_OVERRIDES[prefix]

    for upper, label in HUNDRED_CLASSES:
        if value < upper:
            return label
    return DEFAULT_CATEGORY
