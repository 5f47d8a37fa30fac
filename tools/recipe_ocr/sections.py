"""Locate the title, ingredient and instruction regions in OCR'd lines.

Explicit section headers win. Without them, the ingredient block starts at
the first line that reads like an ingredient and ends at the first numbered
step or at a run of three non-ingredient lines.
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional, Sequence, Tuple

from recipe_ocr.ingredient_parser import looks_like_ingredient_line
from recipe_ocr.models import SectionBoundaries
from recipe_ocr.ocr_config import INGREDIENT_SECTION_HEADERS, INSTRUCTION_SECTION_HEADERS, SECTION_HEADERS

_NON_INGREDIENT_RUN = 3

_MARKED_STEP = re.compile(r"^\d+[.)]\s+(\S)")
_BARE_STEP = re.compile(r"^\d+\s+(\S)")
_STEP_KEYWORD = re.compile(r"^(?:step|étape|etape)\s*\d", re.IGNORECASE)


def _contains_header(line: str, headers: Sequence[str]) -> bool:
    lowered = line.strip().lower()
    return any(header in lowered for header in headers)


def header_key(line: str) -> str:
    lowered = line.strip().lower()
    lowered = re.sub(r"^[\W_]+|[\W_]+$", "", lowered)
    return lowered.strip()


def is_section_header(line: str) -> bool:
    """True when the whole line is a section header such as ``Ingredients:``."""
    return header_key(line) in SECTION_HEADERS


def looks_like_numbered_step(line: str) -> bool:
    text = line.strip()
    if _STEP_KEYWORD.match(text):
        return True
    for pattern in (_MARKED_STEP, _BARE_STEP):
        match = pattern.match(text)
        if match and match.group(1).isupper():
            return True
    return False


def _find_header_lines(lines: Sequence[str]) -> Tuple[Optional[int], Optional[int]]:
    ingredient_header: Optional[int] = None
    instruction_header: Optional[int] = None

    for idx, line in enumerate(lines):
        if ingredient_header is None and _contains_header(line, INGREDIENT_SECTION_HEADERS):
            ingredient_header = idx
        if instruction_header is None and _contains_header(line, INSTRUCTION_SECTION_HEADERS):
            instruction_header = idx
        if ingredient_header is not None and instruction_header is not None:
            break

    return ingredient_header, instruction_header


def _first_ingredient_line(lines: Sequence[str], stop: int) -> Optional[int]:
    for idx in range(1, stop):
        if looks_like_ingredient_line(lines[idx]):
            return idx
    return None


def _is_numbered_instruction(lines: Sequence[str], idx: int, start: int) -> bool:
    line = lines[idx]
    return looks_like_numbered_step(line) and not looks_like_ingredient_line(line)


def _starts_non_ingredient_run(lines: Sequence[str], idx: int, start: int) -> bool:
    if idx <= start + 2:
        return False
    window = lines[idx : idx + _NON_INGREDIENT_RUN]
    return all(not looks_like_ingredient_line(line) for line in window)


BLOCK_END_RULES: Tuple[Callable[[Sequence[str], int, int], bool], ...] = (
    _is_numbered_instruction,
    _starts_non_ingredient_run,
)


def _ingredient_block_end(lines: Sequence[str], start: int, stop: int) -> Optional[int]:
    for idx in range(start, stop):
        if not lines[idx].strip():
            continue
        if any(rule(lines, idx, start) for rule in BLOCK_END_RULES):
            return idx
    return None


def find_section_boundaries(lines: List[str]) -> SectionBoundaries:
    total = len(lines)
    title_end = 0
    ingredients_start = -1
    ingredients_end = -1
    instructions_start = -1

    ingredient_header, instruction_header = _find_header_lines(lines)

    if ingredient_header is not None:
        ingredients_start = ingredient_header + 1
        title_end = ingredient_header
    if instruction_header is not None:
        instructions_start = instruction_header + 1
        if ingredient_header is not None and ingredient_header <= instruction_header:
            ingredients_end = instruction_header

    if ingredients_start == -1:
        first = _first_ingredient_line(lines, instruction_header if instruction_header is not None else total)
        if first is not None:
            ingredients_start = first
            title_end = max(0, first - 1)

    if ingredients_end == -1 and ingredients_start != -1:
        # Heuristics never scan past an instruction header that follows the ingredients.
        header_ahead = instruction_header is not None and instruction_header >= ingredients_start
        stop = instruction_header if header_ahead else total
        block_end = _ingredient_block_end(lines, ingredients_start, stop)
        if block_end is not None:
            ingredients_end = block_end
            instructions_start = block_end
        elif header_ahead:
            ingredients_end = instruction_header

    if title_end == 0 and total > 0:
        title_end = 1
    if ingredients_end == -1:
        ingredients_end = instructions_start if instructions_start != -1 else total
    # An instruction header on or before the ingredient header leaves no ingredient block.
    if ingredients_start != -1 and ingredients_end < ingredients_start:
        ingredients_end = ingredients_start
    if instructions_start == -1:
        instructions_start = ingredients_end

    return SectionBoundaries(
        title_end=title_end,
        ingredients_start=ingredients_start,
        ingredients_end=ingredients_end,
        instructions_start=instructions_start,
    )
