"""Turn one OCR'd ingredient line into a ``ParsedIngredient``.

The line is peeled left to right: list markers, an optional points-system
number, the quantity, the unit, connector words. Whatever is left (minus
preparation notes after a comma and parenthetical asides) is the name.
Confidence starts at 1.0 and only ever goes down.
"""

from __future__ import annotations

import re
from typing import List

from recipe_ocr.models import ParsedIngredient
from recipe_ocr.ocr_config import (
    BULLET_CHARS,
    FRACTION_GLYPHS,
    METADATA_NUMBER_PATTERN,
    MISSING_QUANTITY_PENALTY,
    MISSING_UNIT_PENALTY,
    NAME_FALLBACK_PENALTY,
    NUMBER_UNIT_PATTERN,
    PARENTHETICAL_PENALTY,
    SHORT_INGREDIENT_LINE,
    UNIT_SYNONYMS_BY_LENGTH,
)
from recipe_ocr.quantity import parse_quantity
from recipe_ocr.units import parse_unit

_BULLET_PREFIX = re.compile(rf"^[{re.escape(BULLET_CHARS)}]\s*")
_LIST_NUMBER_PREFIX = re.compile(r"^\d+[.)]\s+")
_SINGLE_LETTER_PREFIX = re.compile(r"^[a-zA-Z]\s+")

_CONNECTORS = (
    re.compile(r"^of\s+", re.IGNORECASE),
    re.compile(r"^de\s+", re.IGNORECASE),
    re.compile(r"^d['’]\s*", re.IGNORECASE),
)
_TRAILING_NOTES = re.compile(r",\s*.*$")
_PARENTHETICAL = re.compile(r"\([^)]+\)")
_PARENTHETICAL_WITH_SPACE = re.compile(r"\s*\([^)]+\)")

_ANY_UNIT_WORD = re.compile(
    r"(?<![\w'’])(?:"
    + "|".join(re.escape(synonym) for synonym in UNIT_SYNONYMS_BY_LENGTH)
    + r")(?![\w'’])"
)
_NUMBER_THEN_TOKEN = re.compile(r"^\d+\s+\S+")


def strip_list_markers(text: str) -> str:
    cleaned = _BULLET_PREFIX.sub("", text.strip())
    cleaned = _LIST_NUMBER_PREFIX.sub("", cleaned)
    cleaned = _SINGLE_LETTER_PREFIX.sub("", cleaned)
    return cleaned.strip()


def strip_metadata_number(text: str) -> str:
    # "3 15 g de beurre": the lone 3 is a points annotation, not the quantity.
    match = METADATA_NUMBER_PATTERN.match(text)
    if not match:
        return text
    return text[len(match.group(1)) :].strip()


def _strip_connectors(text: str) -> str:
    for pattern in _CONNECTORS:
        text = pattern.sub("", text)
    return text


def _capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def parse_ingredient(text: str) -> ParsedIngredient:
    original_text = text.strip()
    confidence = 1.0

    cleaned = strip_metadata_number(strip_list_markers(original_text))

    quantity, after_quantity = parse_quantity(cleaned)
    if quantity is None:
        confidence *= MISSING_QUANTITY_PENALTY

    unit, after_unit = parse_unit(after_quantity)
    if unit is None and quantity is not None:
        confidence *= MISSING_UNIT_PENALTY

    name = _strip_connectors(after_unit.strip())
    name = _TRAILING_NOTES.sub("", name).strip()

    if _PARENTHETICAL.search(name):
        confidence *= PARENTHETICAL_PENALTY
        name = _PARENTHETICAL_WITH_SPACE.sub("", name).strip()

    if not name:
        name = original_text
        confidence *= NAME_FALLBACK_PENALTY

    return ParsedIngredient(
        name=_capitalize_first(name),
        quantity=quantity,
        unit=unit,
        original_text=original_text,
        confidence=confidence,
    )


def parse_ingredients_list(text: str) -> List[ParsedIngredient]:
    return [parse_ingredient(line) for line in text.split("\n") if line.strip()]


def looks_like_ingredient_line(text: str) -> bool:
    line = text.strip().lower()
    if not line:
        return False

    if line[0] in BULLET_CHARS:
        return True

    if _ANY_UNIT_WORD.search(line):
        return True

    if line[0] in FRACTION_GLYPHS:
        return True

    if NUMBER_UNIT_PATTERN.search(line):
        return True

    # Short "2 œufs" reads as an ingredient; long "1 Préchauffer le four ..." does not.
    return len(line) < SHORT_INGREDIENT_LINE and _NUMBER_THEN_TOKEN.match(line) is not None
