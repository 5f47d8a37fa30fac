#!/usr/bin/env python3

from __future__ import annotations

import sys
import unittest
from pathlib import Path

TOOLS_DIR = Path(__file__).resolve().parents[2]
if str(TOOLS_DIR) not in sys.path:
    sys.path.insert(0, str(TOOLS_DIR))

from recipe_ocr.metadata import detect_category, extract_metadata, time_to_minutes
from recipe_ocr.models import DishCategory, ParsedMetadata


class MetadataTests(unittest.TestCase):
    def test_english_times_and_servings(self) -> None:
        metadata, confidence = extract_metadata("Stew\nPrep time: 15 min\nCook time: 1 hour\nServes 4")
        self.assertEqual(metadata.prep_time, 15)
        self.assertEqual(metadata.cook_time, 60)
        self.assertEqual(metadata.servings, 4)
        self.assertEqual(metadata.category, DishCategory.DINNER)
        self.assertAlmostEqual(confidence, 0.95)

    def test_french_rest_time_is_added_to_prep(self) -> None:
        text = "Préparation : 20 min\nCuisson : 1 h\nRepos : 30 min\nPour 6 personnes"
        metadata, confidence = extract_metadata(text)
        self.assertEqual(metadata.prep_time, 50)
        self.assertEqual(metadata.cook_time, 60)
        self.assertEqual(metadata.servings, 6)
        self.assertEqual(confidence, 1.0)

    def test_nothing_found(self) -> None:
        metadata, confidence = extract_metadata("Toast\n2 slices bread")
        self.assertEqual(metadata, ParsedMetadata())
        self.assertEqual(confidence, 0.5)

    def test_portions_and_yield(self) -> None:
        self.assertEqual(extract_metadata("8 portions")[0].servings, 8)
        self.assertEqual(extract_metadata("Makes: 12 muffins")[0].servings, 12)

    def test_time_to_minutes(self) -> None:
        self.assertEqual(time_to_minutes(2, "hrs"), 120)
        self.assertEqual(time_to_minutes(1, "heure"), 60)
        self.assertEqual(time_to_minutes(45, "mins"), 45)

    def test_detect_category(self) -> None:
        self.assertEqual(detect_category("Morning Muffins"), DishCategory.BREAKFAST)
        self.assertEqual(detect_category("Chocolate Cake"), DishCategory.DESSERT)
        self.assertEqual(detect_category("Far breton"), DishCategory.DESSERT)
        self.assertEqual(detect_category("Club Sandwich"), DishCategory.LUNCH)
        self.assertEqual(detect_category("Mango smoothie"), DishCategory.BEVERAGE)
        self.assertEqual(detect_category("Roast chicken"), DishCategory.DINNER)

    def test_earlier_category_group_wins(self) -> None:
        self.assertEqual(detect_category("Breakfast cake"), DishCategory.BREAKFAST)


if __name__ == "__main__":
    unittest.main()
