from __future__ import annotations

import math
from typing import List

SQUARE = "1:1"
LANDSCAPE = "16:9"
PORTRAIT_STORY = "9:16"
PORTRAIT_POST = "4:5"

STANDARD_RATIOS: tuple[str, ...] = (PORTRAIT_STORY, PORTRAIT_POST, SQUARE, LANDSCAPE)
RATIO_TOLERANCE = 0.1


def calculate_aspect_ratio(width: int, height: int) -> str:
    divisor = math.gcd(int(width), int(height))
    if divisor == 0:
        msg = f"Cannot compute aspect ratio of {width}x{height}"
        raise ValueError(msg)
    return f"{int(width) // divisor}:{int(height) // divisor}"


def normalize_ratio(ratio: str) -> float:
    parts = str(ratio).split(":")
    if len(parts) != 2:
        msg = f"Aspect ratio must look like W:H, got {ratio!r}"
        raise ValueError(msg)
    try:
        width, height = (float(part) for part in parts)
    except ValueError as exc:
        msg = f"Aspect ratio must look like W:H, got {ratio!r}"
        raise ValueError(msg) from exc
    if height == 0:
        msg = f"Aspect ratio height must be non-zero, got {ratio!r}"
        raise ValueError(msg)
    return width / height


def ratios_equivalent(first: str, second: str) -> bool:
    return abs(normalize_ratio(first) - normalize_ratio(second)) < RATIO_TOLERANCE


def nearest_standard_ratio(width: float, height: float) -> str:
    value = width / height
    return min(STANDARD_RATIOS, key=lambda ratio: abs(value - normalize_ratio(ratio)))


def target_ratios(source_ratio: str) -> List[str]:
    normalized = normalize_ratio(source_ratio)
    if normalized <= 0.7:
        candidates = [SQUARE, LANDSCAPE, PORTRAIT_POST]
    elif normalized < 1.3:
        candidates = [LANDSCAPE, PORTRAIT_POST, PORTRAIT_STORY]
    else:
        candidates = [SQUARE, PORTRAIT_POST, PORTRAIT_STORY]
    return [ratio for ratio in candidates if not ratios_equivalent(ratio, source_ratio)]
