"""Confidence classification and review hints for a parsed recipe.

Everything here is a pure function of a ``ParsedRecipe``; nothing is cached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List

from recipe_ocr.models import ConfidenceLevel, LowConfidenceItem, ParsedIngredient, ParsedInstruction, ParsedRecipe
from recipe_ocr.ocr_config import HIGH_CONFIDENCE, MEDIUM_CONFIDENCE


@dataclass(frozen=True)
class ConfidenceThresholds:
    high: float = HIGH_CONFIDENCE
    medium: float = MEDIUM_CONFIDENCE


DEFAULT_THRESHOLDS = ConfidenceThresholds()

_LABELS = {
    ConfidenceLevel.HIGH: "High confidence",
    ConfidenceLevel.MEDIUM: "Medium confidence",
    ConfidenceLevel.LOW: "Low confidence",
}

_SUMMARIES = {
    ConfidenceLevel.HIGH: "Text extracted with high accuracy",
    ConfidenceLevel.MEDIUM: "Moderate confidence - review highlighted sections",
    ConfidenceLevel.LOW: "Low confidence - manual review recommended",
}

_REVIEW_COLORS = {"border": "#F59E0B", "background": "#FEF3C7", "text": "#92400E"}
_COLORS = {
    ConfidenceLevel.HIGH: {"border": "#8B5CF6", "background": "transparent", "text": "#8B5CF6"},
    ConfidenceLevel.MEDIUM: _REVIEW_COLORS,
    ConfidenceLevel.LOW: _REVIEW_COLORS,
}

_PROGRESS_COLORS = {
    ConfidenceLevel.HIGH: "#22C55E",
    ConfidenceLevel.MEDIUM: "#F59E0B",
    ConfidenceLevel.LOW: "#EF4444",
}


def get_confidence_level(confidence: float, thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS) -> ConfidenceLevel:
    if confidence >= thresholds.high:
        return ConfidenceLevel.HIGH
    if confidence >= thresholds.medium:
        return ConfidenceLevel.MEDIUM
    return ConfidenceLevel.LOW


def get_confidence_percentage(confidence: float) -> int:
    return int(round(confidence * 100))


def get_confidence_label(level: ConfidenceLevel) -> str:
    return _LABELS[level]


def get_confidence_summary(level: ConfidenceLevel) -> str:
    return _SUMMARIES[level]


def get_recipe_field_confidence(
    recipe: ParsedRecipe,
    thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS,
) -> Dict[str, ConfidenceLevel]:
    return {
        "title": get_confidence_level(recipe.title_confidence, thresholds),
        "ingredients": get_confidence_level(recipe.ingredients_confidence, thresholds),
        "instructions": get_confidence_level(recipe.instructions_confidence, thresholds),
        "metadata": get_confidence_level(recipe.metadata_confidence, thresholds),
        "overall": get_confidence_level(recipe.overall_confidence, thresholds),
    }


def find_low_confidence_items(
    recipe: ParsedRecipe,
    threshold: float = DEFAULT_THRESHOLDS.medium,
) -> List[LowConfidenceItem]:
    """Ingredients first, then instructions, each tagged with its list index."""
    items: List[LowConfidenceItem] = []

    for index, ingredient in enumerate(recipe.ingredients):
        if ingredient.confidence < threshold:
            items.append(
                LowConfidenceItem(
                    kind="ingredient",
                    index=index,
                    text=ingredient.original_text,
                    confidence=ingredient.confidence,
                )
            )

    for index, instruction in enumerate(recipe.instructions):
        if instruction.confidence < threshold:
            items.append(
                LowConfidenceItem(
                    kind="instruction",
                    index=index,
                    text=instruction.step,
                    confidence=instruction.confidence,
                )
            )

    return items


def has_low_confidence_items(recipe: ParsedRecipe, threshold: float = DEFAULT_THRESHOLDS.medium) -> bool:
    return bool(find_low_confidence_items(recipe, threshold))


def should_show_warning_banner(
    recipe: ParsedRecipe,
    thresholds: ConfidenceThresholds = DEFAULT_THRESHOLDS,
) -> bool:
    return recipe.overall_confidence < thresholds.high or has_low_confidence_items(recipe, thresholds.medium)


def is_ingredient_low_confidence(ingredient: ParsedIngredient, threshold: float = DEFAULT_THRESHOLDS.medium) -> bool:
    return ingredient.confidence < threshold


def is_instruction_low_confidence(instruction: ParsedInstruction, threshold: float = DEFAULT_THRESHOLDS.medium) -> bool:
    return instruction.confidence < threshold


def get_confidence_color(level: ConfidenceLevel) -> Dict[str, str]:
    return dict(_COLORS[level])


def get_progress_bar_color(confidence: float) -> str:
    return _PROGRESS_COLORS[get_confidence_level(confidence)]
