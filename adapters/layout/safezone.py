from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Optional

from domain.models import (
    BACKGROUND_ROLE,
    Bounds,
    CoordinatePosition,
    Point,
    SafeArea,
    Size,
)
from domain.ports.layout import GeometryEngine

logger = logging.getLogger(__name__)

EMPTY_SIZE = Size(0, 0)
ORIGIN = Point(0.0, 0.0)


@dataclass(frozen=True)
class GeometryConfig:
    background_role: str = BACKGROUND_ROLE


def cover_scale(
    source_width: float,
    source_height: float,
    container_width: int,
    container_height: int,
) -> Size:
    # Multiply before dividing so exact ratios do not pick up a stray pixel from ceil().
    if container_width * source_height > container_height * source_width:
        width = float(container_width)
        height = container_width * source_height / source_width
    else:
        height = float(container_height)
        width = container_height * source_width / source_height
    return Size(math.ceil(width), math.ceil(height))


def fit_within(
    source_width: float,
    source_height: float,
    max_width: int,
    max_height: int,
) -> Size:
    width = float(max_width)
    height = width * source_height / source_width
    if height > max_height:
        height = float(max_height)
        width = height * source_width / source_height
    return Size(math.floor(width), math.floor(height))


def safe_area(container_width: int, container_height: int, margin: float) -> SafeArea:
    return SafeArea(
        left=container_width * margin,
        top=container_height * margin,
        width=container_width * (1 - 2 * margin),
        height=container_height * (1 - 2 * margin),
    )


class SafezoneGeometryEngine(GeometryEngine):
    def __init__(self, config: GeometryConfig | None = None) -> None:
        self.config = config or GeometryConfig()

    def size(
        self,
        bounds: Optional[Bounds],
        container_width: int,
        container_height: int,
        max_width_percent: float,
        max_height_percent: float,
        role: str,
    ) -> Size:
        if bounds is None or bounds.width <= 0 or bounds.height <= 0:
            return EMPTY_SIZE

        if role == self.config.background_role:
            result = cover_scale(bounds.width, bounds.height, container_width, container_height)
            logger.debug(
                "Cover scaling %sx%s into %sx%s -> %sx%s",
                bounds.width,
                bounds.height,
                container_width,
                container_height,
                result.width,
                result.height,
            )
            return result

        max_width = math.floor(max_width_percent * container_width)
        max_height = math.floor(max_height_percent * container_height)
        result = fit_within(bounds.width, bounds.height, max_width, max_height)
        logger.debug(
            "Scaling %s %sx%s within %sx%s -> %sx%s",
            role,
            bounds.width,
            bounds.height,
            max_width,
            max_height,
            result.width,
            result.height,
        )
        return result

    def position(
        self,
        coordinate_position: CoordinatePosition,
        size: Size,
        container_width: int,
        container_height: int,
        safezone_margin: float,
        apply_safezone: bool,
        role: str,
    ) -> Point:
        if role == self.config.background_role:
            return ORIGIN

        if coordinate_position.has_custom_coordinates:
            return Point(
                coordinate_position.custom_x / 100 * container_width - size.width / 2,
                coordinate_position.custom_y / 100 * container_height - size.height / 2,
            )

        margin = safezone_margin if apply_safezone else 0.0
        area = safe_area(container_width, container_height, margin)

        horizontal = coordinate_position.horizontal_alignment
        if horizontal == "left":
            x = area.left
        elif horizontal == "right":
            x = area.left + area.width - size.width
        else:
            x = area.left + (area.width - size.width) / 2

        vertical = coordinate_position.vertical_alignment
        if vertical == "top":
            y = area.top
        elif vertical == "bottom":
            y = area.top + area.height - size.height
        else:
            y = area.top + (area.height - size.height) / 2

        # Offsets are not clamped and may leave the safe area or the container.
        if coordinate_position.horizontal_offset is not None:
            x += coordinate_position.horizontal_offset / 100 * area.width
        if coordinate_position.vertical_offset is not None:
            y += coordinate_position.vertical_offset / 100 * area.height

        logger.debug("Positioned %s (%s, %s) at %.2f,%.2f", role, horizontal, vertical, x, y)
        return Point(x, y)
