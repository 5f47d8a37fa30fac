#!/usr/bin/env python3
"""Regression harness for end-to-end recipe extraction.

Each fixture holds raw OCR text and the title, ingredient names and steps a
reviewer expects. The harness runs the parser on every fixture and reports
per-field match rates.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from recipe_ocr.ocr_config import setup_logging
from recipe_ocr.recipe_parser import parse_recipe_text

logger = logging.getLogger(__name__)

GATED_RATES = ("exact_match_rate", "title_match_rate", "ingredient_match_rate", "step_match_rate")


def _normalize(text: str) -> str:
    return text.strip().lower()


def score_case(case_payload: Dict[str, Any]) -> Dict[str, Any]:
    recipe = parse_recipe_text(str(case_payload["text"]))
    expected = case_payload["expected"]

    predicted_ingredients = [_normalize(item.name) for item in recipe.ingredients]
    predicted_steps = [_normalize(item.step) for item in recipe.instructions]
    expected_ingredients = [_normalize(item) for item in expected.get("ingredients", [])]
    expected_steps = [_normalize(item) for item in expected.get("steps", [])]

    title_match = _normalize(recipe.title) == _normalize(str(expected.get("title", "")))
    ingredient_exact = predicted_ingredients == expected_ingredients
    step_exact = predicted_steps == expected_steps

    swap_count = 0
    for expected_ingredient in expected_ingredients:
        if any(expected_ingredient in step for step in predicted_steps):
            swap_count += 1
    for expected_step in expected_steps:
        if any(expected_step in ingredient for ingredient in predicted_ingredients):
            swap_count += 1
    expected_total = max(1, len(expected_ingredients) + len(expected_steps))

    return {
        "name": case_payload.get("name", "unnamed"),
        "title_match": title_match,
        "ingredient_exact": ingredient_exact,
        "step_exact": step_exact,
        "exact_match": title_match and ingredient_exact and step_exact,
        "swap_rate": swap_count / expected_total,
        "overall_confidence": recipe.overall_confidence,
    }


def _rate(results: List[Dict[str, Any]], key: str) -> float:
    return sum(1.0 for result in results if result[key]) / len(results)


def summarize(results: List[Dict[str, Any]]) -> Dict[str, Any]:
    return {
        "exact_match_rate": _rate(results, "exact_match"),
        "title_match_rate": _rate(results, "title_match"),
        "ingredient_match_rate": _rate(results, "ingredient_exact"),
        "step_match_rate": _rate(results, "step_exact"),
        "ingredient_step_swap_rate": sum(result["swap_rate"] for result in results) / len(results),
        "mean_overall_confidence": sum(result["overall_confidence"] for result in results) / len(results),
        "fixture_count": len(results),
    }


def main() -> int:
    parser = argparse.ArgumentParser(description="Run recipe extraction regression metrics")
    parser.add_argument("--fixtures", type=Path, required=True, help="Directory of *.json regression fixtures")
    parser.add_argument("--report", type=Path, default=None)
    parser.add_argument(
        "--min-rate",
        type=float,
        default=0.0,
        help="Fail when any match rate falls below this value",
    )
    args = parser.parse_args()

    setup_logging()

    fixtures = sorted(args.fixtures.glob("*.json"))
    if not fixtures:
        raise SystemExit("No regression fixtures found")

    results: List[Dict[str, Any]] = []
    for fixture in fixtures:
        payload = json.loads(fixture.read_text(encoding="utf-8"))
        result = score_case(payload)
        results.append(result)
        print(
            f"{result['name']}: exact_match={'PASS' if result['exact_match'] else 'FAIL'} "
            f"title={'ok' if result['title_match'] else 'miss'} "
            f"ingredients={'ok' if result['ingredient_exact'] else 'miss'} "
            f"steps={'ok' if result['step_exact'] else 'miss'} "
            f"swap={result['swap_rate']:.2%}"
        )

    report = summarize(results)

    print("REGRESSION METRICS")
    print(json.dumps(report, indent=2))

    if args.report is not None:
        args.report.parent.mkdir(parents=True, exist_ok=True)
        args.report.write_text(json.dumps(report, indent=2) + "\n", encoding="utf-8")
        logger.info("Wrote %s", args.report)

    below_floor = [name for name in GATED_RATES if report[name] < args.min_rate]
    if below_floor:
        logger.error("Below --min-rate %.2f: %s", args.min_rate, ", ".join(below_floor))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
