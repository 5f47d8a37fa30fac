"""Heuristic recipe extraction from OCR'd recipe-card text."""

from recipe_ocr.confidence import (
    ConfidenceThresholds,
    find_low_confidence_items,
    get_confidence_level,
    get_recipe_field_confidence,
    should_show_warning_banner,
)
from recipe_ocr.ingredient_parser import looks_like_ingredient_line, parse_ingredient, parse_ingredients_list
from recipe_ocr.models import (
    CanonicalUnit,
    ConfidenceLevel,
    DishCategory,
    LowConfidenceItem,
    ParsedIngredient,
    ParsedInstruction,
    ParsedMetadata,
    ParsedRecipe,
    SectionBoundaries,
)
from recipe_ocr.quantity import parse_quantity
from recipe_ocr.recipe_parser import parse_recipe_text
from recipe_ocr.serialization import recipe_from_json, recipe_to_json, safe_parse_parsed_recipe
from recipe_ocr.units import parse_unit

__all__ = [
    "CanonicalUnit",
    "ConfidenceLevel",
    "ConfidenceThresholds",
    "DishCategory",
    "LowConfidenceItem",
    "ParsedIngredient",
    "ParsedInstruction",
    "ParsedMetadata",
    "ParsedRecipe",
    "SectionBoundaries",
    "find_low_confidence_items",
    "get_confidence_level",
    "get_recipe_field_confidence",
    "looks_like_ingredient_line",
    "parse_ingredient",
    "parse_ingredients_list",
    "parse_quantity",
    "parse_recipe_text",
    "parse_unit",
    "recipe_from_json",
    "recipe_to_json",
    "safe_parse_parsed_recipe",
    "should_show_warning_banner",
]
