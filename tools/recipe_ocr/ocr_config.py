from __future__ import annotations

import logging
import os
import re
from types import MappingProxyType
from typing import Mapping

from recipe_ocr.models import CanonicalUnit, DishCategory


def _env_float(name: str, default: float) -> float:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = (os.environ.get(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


LOG_LEVEL = (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure root logging for the command-line tools."""
    numeric_level = getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, force=True)


HIGH_CONFIDENCE = _env_float("RECIPE_OCR_HIGH_CONFIDENCE", 0.8)
MEDIUM_CONFIDENCE = _env_float("RECIPE_OCR_MEDIUM_CONFIDENCE", 0.6)
MAX_STEP_LENGTH = _env_int("RECIPE_OCR_MAX_STEP_LENGTH", 300)
MIN_INGREDIENT_NAME_LENGTH = _env_int("RECIPE_OCR_MIN_INGREDIENT_NAME_LENGTH", 1)
MIN_STEP_LENGTH = 5
SHORT_INGREDIENT_LINE = 50
# Longer digit runs are OCR noise, not quantities, times or counts.
MAX_NUMBER_DIGITS = 9

FALLBACK_TITLE = "Untitled Recipe"
DEFAULT_CATEGORY = DishCategory.DINNER
DEFAULT_FORM_SERVINGS = 4

FIELD_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "title": 0.15,
        "ingredients": 0.35,
        "instructions": 0.35,
        "metadata": 0.15,
    }
)

# Penalty factors applied to a single ingredient line.
MISSING_QUANTITY_PENALTY = 0.8
MISSING_UNIT_PENALTY = 0.9
PARENTHETICAL_PENALTY = 0.95
NAME_FALLBACK_PENALTY = 0.5

EMPTY_SECTION_CONFIDENCE = 0.3
MARKED_STEP_CONFIDENCE = 0.9
UNMARKED_STEP_CONFIDENCE = 0.8
LONG_STEP_PENALTY = 0.8

UNIT_SYNONYMS: Mapping[str, CanonicalUnit] = MappingProxyType(
    {
        # Teaspoon (English + French)
        "tsp": CanonicalUnit.TSP,
        "teaspoon": CanonicalUnit.TSP,
        "teaspoons": CanonicalUnit.TSP,
        "t": CanonicalUnit.TSP,
        "cc": CanonicalUnit.TSP,
        "c. à c.": CanonicalUnit.TSP,
        "c.à.c.": CanonicalUnit.TSP,
        "cuillère à café": CanonicalUnit.TSP,
        "cuillères à café": CanonicalUnit.TSP,
        # Tablespoon (English + French)
        "tbsp": CanonicalUnit.TBSP,
        "tablespoon": CanonicalUnit.TBSP,
        "tablespoons": CanonicalUnit.TBSP,
        "tbs": CanonicalUnit.TBSP,
        "cs": CanonicalUnit.TBSP,
        "c. à s.": CanonicalUnit.TBSP,
        "c.à.s.": CanonicalUnit.TBSP,
        "cuillère à soupe": CanonicalUnit.TBSP,
        "cuillères à soupe": CanonicalUnit.TBSP,
        "cup": CanonicalUnit.CUP,
        "cups": CanonicalUnit.CUP,
        "c": CanonicalUnit.CUP,
        "fl oz": CanonicalUnit.FL_OZ,
        "fluid ounce": CanonicalUnit.FL_OZ,
        "fluid ounces": CanonicalUnit.FL_OZ,
        "ml": CanonicalUnit.ML,
        "milliliter": CanonicalUnit.ML,
        "milliliters": CanonicalUnit.ML,
        # Centiliters have no canonical value of their own.
        "cl": CanonicalUnit.ML,
        "centilitre": CanonicalUnit.ML,
        "centilitres": CanonicalUnit.ML,
        "l": CanonicalUnit.LITER,
        "liter": CanonicalUnit.LITER,
        "liters": CanonicalUnit.LITER,
        "litre": CanonicalUnit.LITER,
        "litres": CanonicalUnit.LITER,
        "oz": CanonicalUnit.OZ,
        "ounce": CanonicalUnit.OZ,
        "ounces": CanonicalUnit.OZ,
        "lb": CanonicalUnit.LB,
        "lbs": CanonicalUnit.LB,
        "pound": CanonicalUnit.LB,
        "pounds": CanonicalUnit.LB,
        "g": CanonicalUnit.GRAM,
        "gram": CanonicalUnit.GRAM,
        "grams": CanonicalUnit.GRAM,
        "kg": CanonicalUnit.KG,
        "kilogram": CanonicalUnit.KG,
        "kilograms": CanonicalUnit.KG,
        "piece": CanonicalUnit.PIECE,
        "pieces": CanonicalUnit.PIECE,
        "slice": CanonicalUnit.SLICE,
        "slices": CanonicalUnit.SLICE,
        "clove": CanonicalUnit.CLOVE,
        "cloves": CanonicalUnit.CLOVE,
        "head": CanonicalUnit.HEAD,
        "heads": CanonicalUnit.HEAD,
        "bunch": CanonicalUnit.BUNCH,
        "bunches": CanonicalUnit.BUNCH,
        "can": CanonicalUnit.CAN,
        "cans": CanonicalUnit.CAN,
        "bottle": CanonicalUnit.BOTTLE,
        "bottles": CanonicalUnit.BOTTLE,
        "package": CanonicalUnit.PACKAGE,
        "packages": CanonicalUnit.PACKAGE,
        "bag": CanonicalUnit.BAG,
        "bags": CanonicalUnit.BAG,
        "box": CanonicalUnit.BOX,
        "boxes": CanonicalUnit.BOX,
    }
)

# Longest first so "cuillère à café" is tried before "c".
UNIT_SYNONYMS_BY_LENGTH: tuple[str, ...] = tuple(sorted(UNIT_SYNONYMS, key=len, reverse=True))

UNICODE_FRACTIONS: Mapping[str, float] = MappingProxyType(
    {
        "½": 0.5,
        "⅓": 0.333,
        "⅔": 0.666,
        "¼": 0.25,
        "¾": 0.75,
        "⅛": 0.125,
        "⅜": 0.375,
        "⅝": 0.625,
        "⅞": 0.875,
    }
)
FRACTION_GLYPHS = "".join(UNICODE_FRACTIONS)

BULLET_CHARS = "-•*·"

# Short units that commonly follow a bare number ("15 g", "2 cups").
NUMBER_UNIT_PATTERN = re.compile(r"\d+\s*(?:g|kg|ml|l|cl|cc|cs|oz|lb|cup|tsp|tbsp)\b", re.IGNORECASE)
METADATA_NUMBER_PATTERN = re.compile(r"^(\d)\s+(\d+\s*(?:g|kg|ml|l|cl|cc|cs|oz|lb)\b)", re.IGNORECASE)

INGREDIENT_SECTION_HEADERS: tuple[str, ...] = (
    "ingredients",
    "ingredient list",
    "what you need",
    "you will need",
    "you'll need",
    "supplies",
    "ingrédients",
)

INSTRUCTION_SECTION_HEADERS: tuple[str, ...] = (
    "instructions",
    "directions",
    "method",
    "steps",
    "how to make",
    "preparation",
    "procedure",
    "préparation",
    "etapes",
    "étapes",
    "recette",
)

SECTION_HEADERS: tuple[str, ...] = INGREDIENT_SECTION_HEADERS + INSTRUCTION_SECTION_HEADERS

_TIME_UNIT_EN = r"(min(?:ute)?s?|hr?s?|hour?s?)"
_TIME_UNIT_FR = r"(min(?:ute)?s?|h(?:eure)?s?)"

PREP_TIME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"prep(?:aration)?\s*(?:time)?[:\s]*(\d+)\s*" + _TIME_UNIT_EN, re.IGNORECASE),
    re.compile(r"pr[ée]paration\s*[:\s]*(\d+)\s*" + _TIME_UNIT_FR, re.IGNORECASE),
)
COOK_TIME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"cook(?:ing)?\s*(?:time)?[:\s]*(\d+)\s*" + _TIME_UNIT_EN, re.IGNORECASE),
    re.compile(r"cuisson\s*[:\s]*(\d+)\s*" + _TIME_UNIT_FR, re.IGNORECASE),
)
REST_TIME_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"rest(?:ing)?\s*time[:\s]*(\d+)\s*" + _TIME_UNIT_EN, re.IGNORECASE),
    re.compile(r"repos\s*[:\s]*(\d+)\s*" + _TIME_UNIT_FR, re.IGNORECASE),
)
SERVINGS_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:serves|servings|yield|makes)[:\s]*(\d+)", re.IGNORECASE),
    re.compile(r"pour\s*(\d+)\s*personnes?", re.IGNORECASE),
    re.compile(r"(\d+)\s*personnes?", re.IGNORECASE),
    re.compile(r"(\d+)\s*portions?", re.IGNORECASE),
)

PREP_CONFIDENCE_BONUS = 0.15
COOK_CONFIDENCE_BONUS = 0.15
REST_CONFIDENCE_BONUS = 0.1
SERVINGS_CONFIDENCE_BONUS = 0.15
BASE_METADATA_CONFIDENCE = 0.5

# Checked in order; the first group with a hit wins.
CATEGORY_KEYWORDS: tuple[tuple[DishCategory, tuple[str, ...]], ...] = (
    (DishCategory.BREAKFAST, ("breakfast", "morning", "petit-déjeuner", "petit déjeuner")),
    (
        DishCategory.DESSERT,
        ("dessert", "cake", "cookie", "gâteau", "tarte", "far", "flan", "crème", "mousse"),
    ),
    (DishCategory.SNACK, ("snack", "appetizer", "apéritif", "entrée")),
    (DishCategory.LUNCH, ("lunch", "sandwich", "déjeuner")),
    (DishCategory.BEVERAGE, ("drink", "smoothie", "cocktail", "boisson")),
)
