from __future__ import annotations

from typing import Optional, Protocol

from domain.models import Bounds, CoordinatePosition, Point, Size


class GeometryEngine(Protocol):
    def size(
        self,
        bounds: Optional[Bounds],
        container_width: int,
        container_height: int,
        max_width_percent: float,
        max_height_percent: float,
        role: str,
    ) -> Size:
        ...

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
        ...
