"""Entry point: raw OCR text in, ``ParsedRecipe`` out."""

from __future__ import annotations

from typing import List

from recipe_ocr.extractors import extract_ingredients, extract_instructions, extract_title
from recipe_ocr.metadata import extract_metadata
from recipe_ocr.models import ParsedMetadata, ParsedRecipe
from recipe_ocr.ocr_config import FALLBACK_TITLE, FIELD_WEIGHTS
from recipe_ocr.sections import find_section_boundaries


def split_lines(raw_text: str) -> List[str]:
    return [line.strip() for line in raw_text.split("\n") if line.strip()]


def overall_confidence(title: float, ingredients: float, instructions: float, metadata: float) -> float:
    return (
        title * FIELD_WEIGHTS["title"]
        + ingredients * FIELD_WEIGHTS["ingredients"]
        + instructions * FIELD_WEIGHTS["instructions"]
        + metadata * FIELD_WEIGHTS["metadata"]
    )


def _empty_recipe(raw_text: str) -> ParsedRecipe:
    return ParsedRecipe(
        title=FALLBACK_TITLE,
        title_confidence=0.0,
        ingredients=(),
        ingredients_confidence=0.0,
        instructions=(),
        instructions_confidence=0.0,
        metadata=ParsedMetadata(),
        metadata_confidence=0.0,
        overall_confidence=0.0,
        raw_text=raw_text,
    )


def parse_recipe_text(raw_text: str) -> ParsedRecipe:
    lines = split_lines(raw_text)
    if not lines:
        return _empty_recipe(raw_text)

    boundaries = find_section_boundaries(lines)

    title, title_confidence = extract_title(lines, boundaries.title_end)
    ingredients, ingredients_confidence = extract_ingredients(
        lines, boundaries.ingredients_start, boundaries.ingredients_end
    )
    instructions, instructions_confidence = extract_instructions(lines, boundaries.instructions_start)
    # Times and servings often sit outside every detected section.
    metadata, metadata_confidence = extract_metadata(raw_text)

    return ParsedRecipe(
        title=title,
        title_confidence=title_confidence,
        ingredients=tuple(ingredients),
        ingredients_confidence=ingredients_confidence,
        instructions=tuple(instructions),
        instructions_confidence=instructions_confidence,
        metadata=metadata,
        metadata_confidence=metadata_confidence,
        overall_confidence=overall_confidence(
            title_confidence, ingredients_confidence, instructions_confidence, metadata_confidence
        ),
        raw_text=raw_text,
    )
