#!/usr/bin/env python3
"""Parse OCR'd recipe text and report what was extracted and how much to trust it."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from recipe_ocr.confidence import (
    find_low_confidence_items,
    get_confidence_label,
    get_confidence_percentage,
    get_recipe_field_confidence,
    should_show_warning_banner,
)
from recipe_ocr.ocr_config import MEDIUM_CONFIDENCE, setup_logging
from recipe_ocr.recipe_parser import parse_recipe_text
from recipe_ocr.serialization import recipe_to_json

logger = logging.getLogger(__name__)


def _format_quantity(value: float | None) -> str:
    if value is None:
        return "-"
    return f"{value:g}"


def print_report(recipe, threshold: float) -> None:
    levels = get_recipe_field_confidence(recipe)

    print("PARSE REPORT")
    print(f"Title: {recipe.title}")
    print(
        f"Overall: {get_confidence_percentage(recipe.overall_confidence)}% "
        f"({get_confidence_label(levels['overall'])})"
    )
    print("Field levels:")
    for field_name in ("title", "ingredients", "instructions", "metadata"):
        print(f"  {field_name}: {levels[field_name].value}")

    print(f"Ingredients ({len(recipe.ingredients)}):")
    for item in recipe.ingredients:
        unit = item.unit.value if item.unit is not None else "-"
        print(f"  {_format_quantity(item.quantity)} {unit} {item.name} [{item.confidence:.2f}]")

    print(f"Instructions ({len(recipe.instructions)}):")
    for item in recipe.instructions:
        print(f"  {item.step_number}. {item.step} [{item.confidence:.2f}]")

    metadata = recipe.metadata
    print(
        f"Metadata: prep={metadata.prep_time} cook={metadata.cook_time} "
        f"servings={metadata.servings} category={metadata.category.value}"
    )

    low_items = find_low_confidence_items(recipe, threshold)
    print(f"Low-confidence items (< {threshold:.2f}): {len(low_items)}")
    for item in low_items:
        print(f"  {item.kind}[{item.index}]: {item.text} [{item.confidence:.2f}]")

    print(f"Warning banner: {'SHOW' if should_show_warning_banner(recipe) else 'HIDE'}")


def main() -> int:
    parser = argparse.ArgumentParser(description="Parse OCR recipe text into a structured recipe")
    parser.add_argument("--input", type=Path, default=None, help="Text file to parse (default: stdin)")
    parser.add_argument("--json", action="store_true", help="Print the JSON payload instead of the report")
    parser.add_argument("--report", type=Path, default=None, help="Optional output JSON file")
    parser.add_argument(
        "--threshold",
        type=float,
        default=MEDIUM_CONFIDENCE,
        help="Confidence below which ingredients/steps are flagged for review",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    args = parser.parse_args()

    setup_logging(args.log_level)

    if args.input is not None:
        if not args.input.exists():
            raise SystemExit(f"Input file not found: {args.input}")
        raw_text = args.input.read_text(encoding="utf-8")
    else:
        raw_text = sys.stdin.read()

    recipe = parse_recipe_text(raw_text)
    logger.info(
        "Parsed %d ingredients and %d steps (overall confidence %.2f)",
        len(recipe.ingredients),
        len(recipe.instructions),
        recipe.overall_confidence,
    )

    payload = recipe_to_json(recipe, indent=2)
    if args.json:
        print(payload)
    else:
        print_report(recipe, args.threshold)

    if args.report is not None:
        args.report.parent.mkdir(parents=True, exist_ok=True)
        args.report.write_text(payload + "\n", encoding="utf-8")
        logger.info("Wrote %s", args.report)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
