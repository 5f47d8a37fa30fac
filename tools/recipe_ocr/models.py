"""Value types produced by the OCR recipe extraction pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class CanonicalUnit(str, Enum):
    TSP = "tsp"
    TBSP = "tbsp"
    CUP = "cup"
    FL_OZ = "fl_oz"
    ML = "ml"
    LITER = "l"
    OZ = "oz"
    LB = "lb"
    GRAM = "g"
    KG = "kg"
    PIECE = "piece"
    SLICE = "slice"
    CLOVE = "clove"
    HEAD = "head"
    BUNCH = "bunch"
    CAN = "can"
    BOTTLE = "bottle"
    PACKAGE = "package"
    BAG = "bag"
    BOX = "box"


class DishCategory(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    DESSERT = "dessert"
    SNACK = "snack"
    APPETIZER = "appetizer"
    BEVERAGE = "beverage"


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class ParsedIngredient:
    name: str
    quantity: Optional[float]
    unit: Optional[CanonicalUnit]
    original_text: str
    confidence: float


@dataclass(frozen=True)
class ParsedInstruction:
    step: str
    step_number: int
    confidence: float


@dataclass(frozen=True)
class ParsedMetadata:
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    servings: Optional[int] = None
    category: DishCategory = DishCategory.DINNER


@dataclass(frozen=True)
class ParsedRecipe:
    """One OCR attempt's structured result.

    ``overall_confidence`` is the fixed weighted sum of the four field
    confidences; ``raw_text`` is the untouched OCR input.
    """

    title: str
    title_confidence: float
    ingredients: Tuple[ParsedIngredient, ...]
    ingredients_confidence: float
    instructions: Tuple[ParsedInstruction, ...]
    instructions_confidence: float
    metadata: ParsedMetadata
    metadata_confidence: float
    overall_confidence: float
    raw_text: str


@dataclass(frozen=True)
class SectionBoundaries:
    title_end: int
    ingredients_start: int
    ingredients_end: int
    instructions_start: int


@dataclass(frozen=True)
class LowConfidenceItem:
    kind: str  # "ingredient" | "instruction"
    index: int
    text: str
    confidence: float
