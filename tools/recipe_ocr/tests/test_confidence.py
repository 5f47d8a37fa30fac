#!/usr/bin/env python3

from __future__ import annotations

import sys
import unittest
from dataclasses import replace
from pathlib import Path

TOOLS_DIR = Path(__file__).resolve().parents[2]
if str(TOOLS_DIR) not in sys.path:
    sys.path.insert(0, str(TOOLS_DIR))

from recipe_ocr.confidence import (
    ConfidenceThresholds,
    find_low_confidence_items,
    get_confidence_color,
    get_confidence_label,
    get_confidence_level,
    get_confidence_percentage,
    get_confidence_summary,
    get_progress_bar_color,
    get_recipe_field_confidence,
    has_low_confidence_items,
    is_ingredient_low_confidence,
    is_instruction_low_confidence,
    should_show_warning_banner,
)
from recipe_ocr.models import (
    CanonicalUnit,
    ConfidenceLevel,
    LowConfidenceItem,
    ParsedIngredient,
    ParsedInstruction,
    ParsedMetadata,
    ParsedRecipe,
)


def make_recipe(**overrides) -> ParsedRecipe:
    recipe = ParsedRecipe(
        title="Lemon Tart",
        title_confidence=0.85,
        ingredients=(
            ParsedIngredient("Flour", 200.0, CanonicalUnit.GRAM, "200 g flour", 1.0),
            ParsedIngredient("2 cups", None, None, "2 cups", 0.5),
        ),
        ingredients_confidence=0.75,
        instructions=(
            ParsedInstruction("Roll out the pastry", 1, 0.9),
            ParsedInstruction("x" * 320, 2, 0.56),
        ),
        instructions_confidence=0.73,
        metadata=ParsedMetadata(),
        metadata_confidence=0.5,
        overall_confidence=0.7,
        raw_text="",
    )
    return replace(recipe, **overrides)


class ConfidenceLevelTests(unittest.TestCase):
    def test_threshold_boundaries(self) -> None:
        self.assertEqual(get_confidence_level(0.8), ConfidenceLevel.HIGH)
        self.assertEqual(get_confidence_level(0.79), ConfidenceLevel.MEDIUM)
        self.assertEqual(get_confidence_level(0.6), ConfidenceLevel.MEDIUM)
        self.assertEqual(get_confidence_level(0.59), ConfidenceLevel.LOW)
        self.assertEqual(get_confidence_level(0.0), ConfidenceLevel.LOW)

    def test_custom_thresholds(self) -> None:
        strict = ConfidenceThresholds(high=0.95, medium=0.9)
        self.assertEqual(get_confidence_level(0.92, strict), ConfidenceLevel.MEDIUM)
        self.assertEqual(get_confidence_level(0.85, strict), ConfidenceLevel.LOW)

    def test_percentage_and_text(self) -> None:
        self.assertEqual(get_confidence_percentage(0.8675), 87)
        self.assertEqual(get_confidence_percentage(0.0), 0)
        self.assertEqual(get_confidence_label(ConfidenceLevel.HIGH), "High confidence")
        self.assertEqual(get_confidence_summary(ConfidenceLevel.LOW), "Low confidence - manual review recommended")

    def test_field_levels(self) -> None:
        levels = get_recipe_field_confidence(make_recipe())
        self.assertEqual(levels["title"], ConfidenceLevel.HIGH)
        self.assertEqual(levels["ingredients"], ConfidenceLevel.MEDIUM)
        self.assertEqual(levels["metadata"], ConfidenceLevel.LOW)
        self.assertEqual(levels["overall"], ConfidenceLevel.MEDIUM)


class LowConfidenceTests(unittest.TestCase):
    def test_items_are_listed_ingredients_first(self) -> None:
        items = find_low_confidence_items(make_recipe())
        self.assertEqual(
            items,
            [
                LowConfidenceItem("ingredient", 1, "2 cups", 0.5),
                LowConfidenceItem("instruction", 1, "x" * 320, 0.56),
            ],
        )

    def test_threshold_argument(self) -> None:
        self.assertEqual(len(find_low_confidence_items(make_recipe(), 0.55)), 1)
        self.assertFalse(has_low_confidence_items(make_recipe(), 0.4))

    def test_warning_banner(self) -> None:
        self.assertTrue(should_show_warning_banner(make_recipe()))
        clean = make_recipe(
            ingredients=(ParsedIngredient("Flour", 200.0, CanonicalUnit.GRAM, "200 g flour", 1.0),),
            instructions=(ParsedInstruction("Roll out the pastry", 1, 0.9),),
            overall_confidence=0.85,
        )
        self.assertFalse(should_show_warning_banner(clean))
        self.assertTrue(should_show_warning_banner(replace(clean, overall_confidence=0.79)))

    def test_item_predicates(self) -> None:
        recipe = make_recipe()
        self.assertFalse(is_ingredient_low_confidence(recipe.ingredients[0]))
        self.assertTrue(is_ingredient_low_confidence(recipe.ingredients[1]))
        self.assertTrue(is_instruction_low_confidence(recipe.instructions[1]))


class ColorTests(unittest.TestCase):
    def test_review_colors(self) -> None:
        self.assertEqual(get_confidence_color(ConfidenceLevel.HIGH)["border"], "#8B5CF6")
        self.assertEqual(get_confidence_color(ConfidenceLevel.MEDIUM), get_confidence_color(ConfidenceLevel.LOW))

    def test_color_mapping_is_a_copy(self) -> None:
        colors = get_confidence_color(ConfidenceLevel.LOW)
        colors["border"] = "#000000"
        self.assertEqual(get_confidence_color(ConfidenceLevel.LOW)["border"], "#F59E0B")

    def test_progress_bar(self) -> None:
        self.assertEqual(get_progress_bar_color(0.9), "#22C55E")
        self.assertEqual(get_progress_bar_color(0.7), "#F59E0B")
        self.assertEqual(get_progress_bar_color(0.2), "#EF4444")


if __name__ == "__main__":
    unittest.main()
