"""Leading-quantity extraction for ingredient fragments."""

from __future__ import annotations

import re
from typing import Callable, Optional, Tuple

from recipe_ocr.ocr_config import MAX_NUMBER_DIGITS, UNICODE_FRACTIONS

QuantityResult = Tuple[Optional[float], str]

_MIXED_NUMBER = re.compile(r"^(\d+)\s+(\d+)/(\d+)")
_SIMPLE_FRACTION = re.compile(r"^(\d+)/(\d+)")
_DECIMAL = re.compile(r"^(\d+)(?:\.\d+)?")


def _too_long(*digit_runs: str) -> bool:
    return any(len(run) > MAX_NUMBER_DIGITS for run in digit_runs)


def _unicode_fraction(text: str) -> QuantityResult | None:
    for glyph, value in UNICODE_FRACTIONS.items():
        if text.startswith(glyph):
            return value, text[len(glyph) :].strip()
    return None


def _mixed_number(text: str) -> QuantityResult | None:
    match = _MIXED_NUMBER.match(text)
    if not match or _too_long(*match.groups()):
        return None
    denominator = int(match.group(3))
    if denominator == 0:
        return None
    value = int(match.group(1)) + int(match.group(2)) / denominator
    return value, text[match.end() :].strip()


def _simple_fraction(text: str) -> QuantityResult | None:
    match = _SIMPLE_FRACTION.match(text)
    if not match or _too_long(*match.groups()):
        return None
    denominator = int(match.group(2))
    if denominator == 0:
        return None
    return int(match.group(1)) / denominator, text[match.end() :].strip()


def _decimal(text: str) -> QuantityResult | None:
    match = _DECIMAL.match(text)
    if not match or _too_long(match.group(1)):
        return None
    return float(match.group(0)), text[match.end() :].strip()


QUANTITY_STRATEGIES: Tuple[Callable[[str], QuantityResult | None], ...] = (
    _unicode_fraction,
    _mixed_number,
    _simple_fraction,
    _decimal,
)


def parse_quantity(text: str) -> QuantityResult:
    """Return ``(value, remaining)`` for the first strategy that matches.

    Nothing is validated here: zero is returned as-is. A fragment with no
    leading number, or with a digit run too long to be a quantity, comes back
    stripped with a ``None`` value.
    """
    trimmed = text.strip()
    for strategy in QUANTITY_STRATEGIES:
        result = strategy(trimmed)
        if result is not None:
            return result
    return None, trimmed
