from __future__ import annotations

import re
from typing import List, Sequence, Tuple

from recipe_ocr.ingredient_parser import parse_ingredient
from recipe_ocr.models import ParsedIngredient, ParsedInstruction
from recipe_ocr.ocr_config import (
    BULLET_CHARS,
    EMPTY_SECTION_CONFIDENCE,
    FALLBACK_TITLE,
    LONG_STEP_PENALTY,
    MARKED_STEP_CONFIDENCE,
    MAX_STEP_LENGTH,
    MIN_INGREDIENT_NAME_LENGTH,
    MIN_STEP_LENGTH,
    UNMARKED_STEP_CONFIDENCE,
)
from recipe_ocr.sections import is_section_header

_RECIPE_LABEL = re.compile(r"^recipe\b[:\s]*", re.IGNORECASE)
_TRAILING_PUNCTUATION = re.compile(r"[.!?]+$")
_STEP_MARKER = re.compile(r"^(?:(?:step|étape|etape)\s*)?(\d+)\s*[.):\-]*\s+(.+)", re.IGNORECASE)
_BULLET_PREFIX = re.compile(rf"^[{re.escape(BULLET_CHARS)}]\s*")


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def _title_case(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split(" "))


def extract_title(lines: Sequence[str], end: int) -> Tuple[str, float]:
    candidates = [line.strip() for line in lines[: max(0, end)] if line.strip()]
    if not candidates:
        return FALLBACK_TITLE, EMPTY_SECTION_CONFIDENCE

    title = _RECIPE_LABEL.sub("", candidates[0]).strip()
    title = _TRAILING_PUNCTUATION.sub("", title).strip()
    if not title:
        title = candidates[0]
    title = _title_case(title)

    confidence = 0.85 if 3 < len(title) < 100 else 0.6
    return title, confidence


def extract_ingredients(
    lines: Sequence[str],
    start: int,
    end: int,
    *,
    min_name_length: int = MIN_INGREDIENT_NAME_LENGTH,
) -> Tuple[List[ParsedIngredient], float]:
    if start < 0 or start >= end:
        return [], EMPTY_SECTION_CONFIDENCE

    parsed = [parse_ingredient(line) for line in lines[start:end] if line.strip()]
    ingredients = [item for item in parsed if len(item.name) > min_name_length]
    if not ingredients:
        return [], EMPTY_SECTION_CONFIDENCE

    return ingredients, _mean([item.confidence for item in ingredients])


def clean_step(line: str) -> Tuple[str, bool]:
    """Strip a step marker ("1.", "Step 2", "Étape 3") or bullet.

    The second value says whether a numbered marker was removed. The number
    itself is thrown away.
    """
    text = line.strip()
    match = _STEP_MARKER.match(text)
    if match:
        return match.group(2).strip(), True
    return _BULLET_PREFIX.sub("", text).strip(), False


def extract_instructions(
    lines: Sequence[str],
    start: int,
    *,
    max_step_length: int = MAX_STEP_LENGTH,
) -> Tuple[List[ParsedInstruction], float]:
    if start < 0 or start >= len(lines):
        return [], EMPTY_SECTION_CONFIDENCE

    instructions: List[ParsedInstruction] = []
    for line in lines[start:]:
        if not line.strip():
            continue

        step, marked = clean_step(line)
        if len(step) < MIN_STEP_LENGTH:
            continue
        if is_section_header(step):
            continue

        confidence = MARKED_STEP_CONFIDENCE if marked else UNMARKED_STEP_CONFIDENCE
        # Very long steps are usually several steps merged by OCR.
        if len(step) > max_step_length:
            confidence *= LONG_STEP_PENALTY

        instructions.append(
            ParsedInstruction(step=step, step_number=len(instructions) + 1, confidence=confidence)
        )

    if not instructions:
        return [], EMPTY_SECTION_CONFIDENCE

    return instructions, _mean([item.confidence for item in instructions])
