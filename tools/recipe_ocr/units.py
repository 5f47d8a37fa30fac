from __future__ import annotations

from typing import Optional, Tuple

from recipe_ocr.models import CanonicalUnit
from recipe_ocr.ocr_config import UNIT_SYNONYMS, UNIT_SYNONYMS_BY_LENGTH

UnitResult = Tuple[Optional[CanonicalUnit], str]

# Apostrophes are not terminators: "l'huile" must not read as liters.
_UNIT_TERMINATORS = frozenset(".,;:!?()[]/")


def _ends_at_word_boundary(text: str, end: int) -> bool:
    if end >= len(text):
        return True
    following = text[end]
    return following.isspace() or following in _UNIT_TERMINATORS


def lookup_unit(token: str) -> CanonicalUnit | None:
    return UNIT_SYNONYMS.get(token.strip().lower())


def parse_unit(text: str) -> UnitResult:
    """Match a leading unit synonym, longest synonym first.

    The remainder is cut from the original text so the ingredient name keeps
    its case. On no match the text is returned untouched.
    """
    trimmed = text.strip()
    lowered = trimmed.lower()

    for synonym in UNIT_SYNONYMS_BY_LENGTH:
        if lowered.startswith(synonym) and _ends_at_word_boundary(lowered, len(synonym)):
            return UNIT_SYNONYMS[synonym], trimmed[len(synonym) :].strip()

    return None, text
