"""JSON boundary for parsed recipes.

Screens hand a ``ParsedRecipe`` to each other as a flat camelCase JSON
object. Missing values are written as explicit ``null`` and never dropped.
Decoding validates every field and reports problems as plain strings,
the same way the dataset validator does.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from recipe_ocr.models import (
    CanonicalUnit,
    DishCategory,
    ParsedIngredient,
    ParsedInstruction,
    ParsedMetadata,
    ParsedRecipe,
)
from recipe_ocr.ocr_config import DEFAULT_CATEGORY, DEFAULT_FORM_SERVINGS, FALLBACK_TITLE

logger = logging.getLogger(__name__)

_CONFIDENCE_FIELDS = (
    "titleConfidence",
    "ingredientsConfidence",
    "instructionsConfidence",
    "metadataConfidence",
    "overallConfidence",
)


class RecipePayloadError(ValueError):
    def __init__(self, errors: List[str]) -> None:
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass(frozen=True)
class ParseOutcome:
    success: bool
    data: Any = None
    error: Optional[str] = None


@dataclass(frozen=True)
class OCRIngredient:
    name: str
    quantity: Optional[float]
    unit: Optional[CanonicalUnit]


@dataclass(frozen=True)
class OCRData:
    """Editable draft handed to the recipe form."""

    title: str = ""
    ingredients: Tuple[OCRIngredient, ...] = ()
    steps: Tuple[str, ...] = ()
    servings: int = DEFAULT_FORM_SERVINGS
    category: DishCategory = DEFAULT_CATEGORY
    prep_time: Optional[int] = None
    cook_time: Optional[int] = None
    image_uri: Optional[str] = None
    source: Optional[str] = None


def _enum_value(value: Any) -> Any:
    return value.value if value is not None else None


def recipe_to_dict(recipe: ParsedRecipe) -> Dict[str, Any]:
    return {
        "title": recipe.title,
        "titleConfidence": recipe.title_confidence,
        "ingredients": [
            {
                "name": item.name,
                "quantity": item.quantity,
                "unit": _enum_value(item.unit),
                "originalText": item.original_text,
                "confidence": item.confidence,
            }
            for item in recipe.ingredients
        ],
        "ingredientsConfidence": recipe.ingredients_confidence,
        "instructions": [
            {
                "step": item.step,
                "stepNumber": item.step_number,
                "confidence": item.confidence,
            }
            for item in recipe.instructions
        ],
        "instructionsConfidence": recipe.instructions_confidence,
        "metadata": {
            "prepTime": recipe.metadata.prep_time,
            "cookTime": recipe.metadata.cook_time,
            "servings": recipe.metadata.servings,
            "category": recipe.metadata.category.value,
        },
        "metadataConfidence": recipe.metadata_confidence,
        "overallConfidence": recipe.overall_confidence,
        "rawText": recipe.raw_text,
    }


def recipe_to_json(recipe: ParsedRecipe, indent: Optional[int] = None) -> str:
    return json.dumps(recipe_to_dict(recipe), ensure_ascii=False, indent=indent)


def _is_number(value: Any) -> bool:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_text(value: Any, min_length: int = 0) -> bool:
    return isinstance(value, str) and len(value) >= min_length


def _is_known_category(value: Any) -> bool:
    return isinstance(value, str) and value in {category.value for category in DishCategory}


def _check_confidence(value: Any, where: str, errors: List[str]) -> None:
    if not _is_number(value) or not 0.0 <= value <= 1.0:
        errors.append(f"{where} must be a number between 0 and 1")


def _check_optional_count(value: Any, where: str, errors: List[str]) -> None:
    if value is not None and not _is_count(value):
        errors.append(f"{where} must be a non-negative integer or null")


def validate_recipe_payload(payload: Any) -> List[str]:
    if not isinstance(payload, dict):
        return ["payload must be a JSON object"]

    errors: List[str] = []

    if not _is_text(payload.get("title"), 1):
        errors.append("title must be a non-empty string")
    if not _is_text(payload.get("rawText")):
        errors.append("rawText must be a string")
    for key in _CONFIDENCE_FIELDS:
        _check_confidence(payload.get(key), key, errors)

    ingredients = payload.get("ingredients")
    if not isinstance(ingredients, list):
        errors.append("ingredients must be a list")
        ingredients = []
    valid_units = {unit.value for unit in CanonicalUnit}
    for idx, item in enumerate(ingredients):
        where = f"ingredients[{idx}]"
        if not isinstance(item, dict):
            errors.append(f"{where} must be an object")
            continue
        if not _is_text(item.get("name"), 1):
            errors.append(f"{where}.name must be a non-empty string")
        quantity = item.get("quantity")
        if quantity is not None and not _is_number(quantity):
            errors.append(f"{where}.quantity must be a number or null")
        unit = item.get("unit")
        if unit is not None and (not isinstance(unit, str) or unit not in valid_units):
            errors.append(f"{where}.unit '{unit}' is not a known unit")
        if not _is_text(item.get("originalText")):
            errors.append(f"{where}.originalText must be a string")
        _check_confidence(item.get("confidence"), f"{where}.confidence", errors)

    instructions = payload.get("instructions")
    if not isinstance(instructions, list):
        errors.append("instructions must be a list")
        instructions = []
    for idx, item in enumerate(instructions):
        where = f"instructions[{idx}]"
        if not isinstance(item, dict):
            errors.append(f"{where} must be an object")
            continue
        if not _is_text(item.get("step"), 1):
            errors.append(f"{where}.step must be a non-empty string")
        step_number = item.get("stepNumber")
        if not _is_count(step_number) or step_number < 1:
            errors.append(f"{where}.stepNumber must be a positive integer")
        _check_confidence(item.get("confidence"), f"{where}.confidence", errors)

    metadata = payload.get("metadata")
    if not isinstance(metadata, dict):
        errors.append("metadata must be an object")
    else:
        for key in ("prepTime", "cookTime", "servings"):
            _check_optional_count(metadata.get(key), f"metadata.{key}", errors)
        if not _is_known_category(metadata.get("category")):
            errors.append(f"metadata.category '{metadata.get('category')}' is not a known category")

    return errors


def recipe_from_dict(payload: Any) -> ParsedRecipe:
    errors = validate_recipe_payload(payload)
    if errors:
        raise RecipePayloadError(errors)

    metadata = payload["metadata"]
    return ParsedRecipe(
        title=payload["title"],
        title_confidence=float(payload["titleConfidence"]),
        ingredients=tuple(
            ParsedIngredient(
                name=item["name"],
                quantity=float(item["quantity"]) if item.get("quantity") is not None else None,
                unit=CanonicalUnit(item["unit"]) if item.get("unit") is not None else None,
                original_text=item["originalText"],
                confidence=float(item["confidence"]),
            )
            for item in payload["ingredients"]
        ),
        ingredients_confidence=float(payload["ingredientsConfidence"]),
        instructions=tuple(
            ParsedInstruction(
                step=item["step"],
                step_number=int(item["stepNumber"]),
                confidence=float(item["confidence"]),
            )
            for item in payload["instructions"]
        ),
        instructions_confidence=float(payload["instructionsConfidence"]),
        metadata=ParsedMetadata(
            prep_time=metadata.get("prepTime"),
            cook_time=metadata.get("cookTime"),
            servings=metadata.get("servings"),
            category=DishCategory(metadata["category"]),
        ),
        metadata_confidence=float(payload["metadataConfidence"]),
        overall_confidence=float(payload["overallConfidence"]),
        raw_text=payload["rawText"],
    )


def recipe_from_json(json_string: str) -> ParsedRecipe:
    return recipe_from_dict(json.loads(json_string))


def safe_parse_parsed_recipe(json_string: Optional[str]) -> ParseOutcome:
    if not json_string:
        return ParseOutcome(success=False, error="No OCR data provided")

    try:
        payload = json.loads(json_string)
    except ValueError as exc:
        logger.debug("Rejected OCR payload that is not JSON: %s", exc)
        return ParseOutcome(success=False, error=f"Failed to parse JSON: {exc}")

    try:
        recipe = recipe_from_dict(payload)
    except RecipePayloadError as exc:
        logger.debug("Rejected OCR payload with %d schema errors", len(exc.errors))
        return ParseOutcome(success=False, error=f"Invalid OCR data: {exc.errors[0]}")

    return ParseOutcome(success=True, data=recipe)


def has_minimum_recipe_data(recipe: ParsedRecipe) -> bool:
    has_title = bool(recipe.title) and recipe.title != FALLBACK_TITLE
    return has_title or bool(recipe.ingredients) or bool(recipe.instructions)


def to_form_data(recipe: ParsedRecipe, image_uri: Optional[str] = None, source: Optional[str] = None) -> OCRData:
    """Copy a parsed recipe into a form draft, filling the default serving count."""
    return OCRData(
        title=recipe.title,
        ingredients=tuple(
            OCRIngredient(name=item.name, quantity=item.quantity, unit=item.unit) for item in recipe.ingredients
        ),
        steps=tuple(item.step for item in recipe.instructions),
        servings=recipe.metadata.servings or DEFAULT_FORM_SERVINGS,
        category=recipe.metadata.category,
        prep_time=recipe.metadata.prep_time,
        cook_time=recipe.metadata.cook_time,
        image_uri=image_uri,
        source=source,
    )


def ocr_data_to_dict(data: OCRData) -> Dict[str, Any]:
    return {
        "title": data.title,
        "ingredients": [
            {"name": item.name, "quantity": item.quantity, "unit": _enum_value(item.unit)}
            for item in data.ingredients
        ],
        "steps": list(data.steps),
        "servings": data.servings,
        "category": data.category.value,
        "prepTime": data.prep_time,
        "cookTime": data.cook_time,
        "imageUri": data.image_uri,
        "source": data.source,
    }


def _coerce_unit(value: Any) -> Optional[CanonicalUnit]:
    try:
        return CanonicalUnit(value) if value is not None else None
    except (TypeError, ValueError):
        return None


def _validate_ocr_data_payload(payload: Any) -> List[str]:
    if not isinstance(payload, dict):
        return ["payload must be a JSON object"]

    errors: List[str] = []
    if not _is_text(payload.get("title", "")):
        errors.append("title must be a string")

    ingredients = payload.get("ingredients", [])
    if not isinstance(ingredients, list):
        errors.append("ingredients must be a list")
        ingredients = []
    for idx, item in enumerate(ingredients):
        if not isinstance(item, dict) or not _is_text(item.get("name"), 1):
            errors.append(f"ingredients[{idx}].name must be a non-empty string")
        elif item.get("quantity") is not None and not _is_number(item.get("quantity")):
            errors.append(f"ingredients[{idx}].quantity must be a number or null")

    steps = payload.get("steps", [])
    if not isinstance(steps, list) or not all(_is_text(step) for step in steps):
        errors.append("steps must be a list of strings")

    servings = payload.get("servings", DEFAULT_FORM_SERVINGS)
    if not _is_count(servings) or servings < 1:
        errors.append("servings must be a positive integer")
    if not _is_known_category(payload.get("category", DEFAULT_CATEGORY.value)):
        errors.append(f"category '{payload.get('category')}' is not a known category")
    for key in ("prepTime", "cookTime"):
        _check_optional_count(payload.get(key), key, errors)
    return errors


def safe_parse_ocr_data(json_string: Optional[str]) -> ParseOutcome:
    """Decode a form draft. Absent fields take defaults; unknown units become None."""
    if not json_string:
        return ParseOutcome(success=False, error="No OCR data provided")

    try:
        payload = json.loads(json_string)
    except ValueError as exc:
        logger.debug("Rejected form payload that is not JSON: %s", exc)
        return ParseOutcome(success=False, error=f"Failed to parse JSON: {exc}")

    errors = _validate_ocr_data_payload(payload)
    if errors:
        logger.debug("Rejected form payload with %d schema errors", len(errors))
        return ParseOutcome(success=False, error=f"Invalid OCR data: {errors[0]}")

    data = OCRData(
        title=payload.get("title", ""),
        ingredients=tuple(
            OCRIngredient(
                name=item["name"],
                quantity=float(item["quantity"]) if item.get("quantity") is not None else None,
                unit=_coerce_unit(item.get("unit")),
            )
            for item in payload.get("ingredients", [])
        ),
        steps=tuple(payload.get("steps", [])),
        servings=payload.get("servings", DEFAULT_FORM_SERVINGS),
        category=DishCategory(payload.get("category", DEFAULT_CATEGORY.value)),
        prep_time=payload.get("prepTime"),
        cook_time=payload.get("cookTime"),
        image_uri=payload.get("imageUri"),
        source=payload.get("source"),
    )
    return ParseOutcome(success=True, data=data)
