#!/usr/bin/env python3

from __future__ import annotations

import sys
import unittest
from pathlib import Path

TOOLS_DIR = Path(__file__).resolve().parents[2]
if str(TOOLS_DIR) not in sys.path:
    sys.path.insert(0, str(TOOLS_DIR))

from recipe_ocr.models import CanonicalUnit, DishCategory
from recipe_ocr.ocr_config import FIELD_WEIGHTS
from recipe_ocr.recipe_parser import overall_confidence, parse_recipe_text, split_lines
from recipe_ocr.serialization import recipe_to_json, safe_parse_parsed_recipe

CHOCOLATE_CAKE = (
    "Chocolate Cake\nIngredients\n2 cups flour\n1/2 cup sugar\n"
    "Instructions\n1. Mix dry ingredients\n2. Bake at 350"
)

FAR_BRETON = """Far breton
Pour 6 personnes
Ingrédients
3 15 g de beurre
125 g de farine
4 œufs
50 cl de lait
Étapes
1. Préchauffer le four à 200°C.
2. Mélanger la farine et les œufs.
3. Verser le lait et cuire 45 min.
"""


class RecipeParserTests(unittest.TestCase):
    def test_chocolate_cake(self) -> None:
        recipe = parse_recipe_text(CHOCOLATE_CAKE)

        self.assertEqual(recipe.title, "Chocolate Cake")
        self.assertEqual(
            [(item.name, item.quantity, item.unit) for item in recipe.ingredients],
            [("Flour", 2.0, CanonicalUnit.CUP), ("Sugar", 0.5, CanonicalUnit.CUP)],
        )
        self.assertEqual(
            [(item.step, item.step_number) for item in recipe.instructions],
            [("Mix dry ingredients", 1), ("Bake at 350", 2)],
        )
        self.assertEqual(recipe.metadata.category, DishCategory.DESSERT)
        self.assertIsNone(recipe.metadata.servings)
        self.assertEqual(recipe.raw_text, CHOCOLATE_CAKE)
        self.assertAlmostEqual(recipe.overall_confidence, 0.8675)

    def test_french_card_with_points_prefix(self) -> None:
        recipe = parse_recipe_text(FAR_BRETON)

        self.assertEqual(recipe.title, "Far Breton")
        self.assertEqual(
            [(item.name, item.quantity, item.unit) for item in recipe.ingredients],
            [
                ("Beurre", 15.0, CanonicalUnit.GRAM),
                ("Farine", 125.0, CanonicalUnit.GRAM),
                ("Œufs", 4.0, None),
                ("Lait", 50.0, CanonicalUnit.ML),
            ],
        )
        self.assertEqual(len(recipe.instructions), 3)
        self.assertEqual(recipe.instructions[0].step, "Préchauffer le four à 200°C.")
        self.assertEqual(recipe.metadata.servings, 6)
        self.assertEqual(recipe.metadata.category, DishCategory.DESSERT)

    def test_headerless_ingredient_lines(self) -> None:
        recipe = parse_recipe_text("2 œufs\n1/2 cuillère à café de vanille")
        self.assertEqual(recipe.title, "2 Œufs")
        self.assertEqual(len(recipe.ingredients), 1)
        self.assertEqual(recipe.ingredients[0].quantity, 0.5)
        self.assertEqual(recipe.ingredients[0].unit, CanonicalUnit.TSP)
        self.assertEqual(recipe.instructions, ())

    def test_empty_input(self) -> None:
        for raw_text in ("", "   \n\n  "):
            recipe = parse_recipe_text(raw_text)
            self.assertEqual(recipe.title, "Untitled Recipe")
            self.assertEqual(recipe.ingredients, ())
            self.assertEqual(recipe.instructions, ())
            self.assertEqual(recipe.metadata.category, DishCategory.DINNER)
            self.assertEqual(recipe.overall_confidence, 0.0)
            self.assertEqual(recipe.raw_text, raw_text)

    def test_overall_is_weighted_sum_of_fields(self) -> None:
        for raw_text in (CHOCOLATE_CAKE, FAR_BRETON, "Just one line", "- salt\n- pepper"):
            recipe = parse_recipe_text(raw_text)
            expected = (
                recipe.title_confidence * FIELD_WEIGHTS["title"]
                + recipe.ingredients_confidence * FIELD_WEIGHTS["ingredients"]
                + recipe.instructions_confidence * FIELD_WEIGHTS["instructions"]
                + recipe.metadata_confidence * FIELD_WEIGHTS["metadata"]
            )
            self.assertAlmostEqual(recipe.overall_confidence, expected)
            self.assertGreaterEqual(recipe.overall_confidence, 0.0)
            self.assertLessEqual(recipe.overall_confidence, 1.0)

    def test_step_numbers_are_sequential(self) -> None:
        recipe = parse_recipe_text("Bread\nIngredients\n500 g flour\nMethod\n5. Mix\n9. Let the dough rise\nBake it hot")
        self.assertEqual([item.step_number for item in recipe.instructions], [1, 2])

    def test_long_digit_runs_are_not_numbers(self) -> None:
        digits = "9" * 400
        for raw_text, quantity in (
            ("Cake\n" + digits + "/1 cup flour", None),
            ("Cake\n" + digits + " 1/2 cup flour", None),
            ("Cake\n1 " + digits + "/2 cup flour", 1.0),
            ("Bread\n" + digits + " g flour", None),
        ):
            recipe = parse_recipe_text(raw_text)
            self.assertEqual(len(recipe.ingredients), 1, msg=raw_text[:20])
            self.assertEqual(recipe.ingredients[0].quantity, quantity)

            outcome = safe_parse_parsed_recipe(recipe_to_json(recipe))
            self.assertTrue(outcome.success, msg=outcome.error)
            self.assertEqual(outcome.data, recipe)

    def test_long_times_and_counts_are_ignored(self) -> None:
        recipe = parse_recipe_text("Stew\nprep time " + "9" * 4400 + " min\nCook time: 2 h\nServes " + "9" * 50)
        self.assertIsNone(recipe.metadata.prep_time)
        self.assertEqual(recipe.metadata.cook_time, 120)
        self.assertIsNone(recipe.metadata.servings)
        self.assertTrue(safe_parse_parsed_recipe(recipe_to_json(recipe)).success)

    def test_both_headers_on_one_line_do_not_overlap(self) -> None:
        recipe = parse_recipe_text("Tarte\nIngredients et preparation\n200 g farine\nMelanger la farine")
        self.assertEqual(recipe.ingredients, ())
        self.assertEqual([item.step for item in recipe.instructions], ["g farine", "Melanger la farine"])

    def test_weights_sum_to_one(self) -> None:
        self.assertAlmostEqual(sum(FIELD_WEIGHTS.values()), 1.0)
        self.assertAlmostEqual(overall_confidence(1.0, 1.0, 1.0, 1.0), 1.0)

    def test_split_lines(self) -> None:
        self.assertEqual(split_lines("  a \n\n b\n   "), ["a", "b"])


if __name__ == "__main__":
    unittest.main()
