from __future__ import annotations

import re
from typing import Optional, Sequence, Tuple

from recipe_ocr.models import DishCategory, ParsedMetadata
from recipe_ocr.ocr_config import (
    BASE_METADATA_CONFIDENCE,
    CATEGORY_KEYWORDS,
    COOK_CONFIDENCE_BONUS,
    COOK_TIME_PATTERNS,
    DEFAULT_CATEGORY,
    MAX_NUMBER_DIGITS,
    PREP_CONFIDENCE_BONUS,
    PREP_TIME_PATTERNS,
    REST_CONFIDENCE_BONUS,
    REST_TIME_PATTERNS,
    SERVINGS_CONFIDENCE_BONUS,
    SERVINGS_PATTERNS,
)


def time_to_minutes(value: int, unit: str) -> int:
    if unit.lower().startswith("h"):
        return value * 60
    return value


def _count(digits: str) -> Optional[int]:
    if len(digits) > MAX_NUMBER_DIGITS:
        return None
    return int(digits)


def _first_minutes(text: str, patterns: Sequence[re.Pattern[str]]) -> Optional[int]:
    for pattern in patterns:
        match = pattern.search(text)
        value = _count(match.group(1)) if match else None
        if value is not None:
            return time_to_minutes(value, match.group(2))
    return None


def _first_servings(text: str) -> Optional[int]:
    for pattern in SERVINGS_PATTERNS:
        match = pattern.search(text)
        value = _count(match.group(1)) if match else None
        if value is not None:
            return value
    return None


def detect_category(text: str) -> DishCategory:
    lowered = text.lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


def extract_metadata(text: str) -> Tuple[ParsedMetadata, float]:
    """Scan the whole OCR text for times, servings and a dish category.

    Rest time ("repos") has no field of its own and is folded into prep time.
    """
    confidence = BASE_METADATA_CONFIDENCE

    prep_time = _first_minutes(text, PREP_TIME_PATTERNS)
    if prep_time is not None:
        confidence += PREP_CONFIDENCE_BONUS

    cook_time = _first_minutes(text, COOK_TIME_PATTERNS)
    if cook_time is not None:
        confidence += COOK_CONFIDENCE_BONUS

    rest_time = _first_minutes(text, REST_TIME_PATTERNS)
    if rest_time is not None:
        prep_time = (prep_time or 0) + rest_time
        confidence += REST_CONFIDENCE_BONUS

    servings = _first_servings(text)
    if servings is not None:
        confidence += SERVINGS_CONFIDENCE_BONUS

    metadata = ParsedMetadata(
        prep_time=prep_time,
        cook_time=cook_time,
        servings=servings,
        category=detect_category(text),
    )
    return metadata, min(confidence, 1.0)
