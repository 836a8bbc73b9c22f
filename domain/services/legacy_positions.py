"""Translation of legacy position keywords into coordinate positions.

Older rule documents describe placement with preset keywords such as ``"top-right"`` or
``"left-center-30"``. The engine only understands :class:`CoordinatePosition`, so stored
documents are upgraded once when they are loaded.

Ratio presets place the element's centre at the given fraction of the safe area along one
axis, mirrored for ``right``/``bottom``. The ``middle-*`` presets sit a quarter of the safe
area away from the centre toward the named edge.
"""

from __future__ import annotations

import copy
import logging
import re
from typing import Any, Dict, Optional

from domain.models import CoordinatePosition

logger = logging.getLogger(__name__)

DEFAULT_CHANNEL_ID = "default"

_EDGE_CENTER_RATIO = re.compile(r"^(top|left|right|bottom)-center-(\d+)$")
_BASE_RATIO = re.compile(
    r"^(top-left|top-right|bottom-left|bottom-right|left|right|top|bottom)-(\d+)$"
)

_ALIGNMENTS: Dict[str, tuple[str, str]] = {
    "center": ("center", "middle"),
    "middle-center": ("center", "middle"),
    "top": ("center", "top"),
    "top-center": ("center", "top"),
    "bottom": ("center", "bottom"),
    "bottom-center": ("center", "bottom"),
    "left": ("left", "middle"),
    "left-center": ("left", "middle"),
    "right": ("right", "middle"),
    "right-center": ("right", "middle"),
    "top-left": ("left", "top"),
    "top-right": ("right", "top"),
    "bottom-left": ("left", "bottom"),
    "bottom-right": ("right", "bottom"),
}

_MIDDLE_OFFSETS: Dict[str, tuple[Optional[float], Optional[float]]] = {
    "middle-top-center": (None, -25.0),
    "middle-bottom-center": (None, 25.0),
    "middle-left-center": (-25.0, None),
    "middle-right-center": (25.0, None),
}


def coordinate_position_from_keyword(keyword: str) -> CoordinatePosition:
    normalized = str(keyword or "").strip().lower()

    if normalized in _ALIGNMENTS:
        horizontal, vertical = _ALIGNMENTS[normalized]
        return CoordinatePosition(horizontal_alignment=horizontal, vertical_alignment=vertical)

    if normalized in _MIDDLE_OFFSETS:
        horizontal_offset, vertical_offset = _MIDDLE_OFFSETS[normalized]
        return CoordinatePosition(
            horizontal_offset=horizontal_offset,
            vertical_offset=vertical_offset,
        )

    edge_match = _EDGE_CENTER_RATIO.match(normalized)
    if edge_match:
        edge, percent = edge_match.group(1), int(edge_match.group(2))
        return _ratio_position(edge, percent)

    base_match = _BASE_RATIO.match(normalized)
    if base_match:
        base, percent = base_match.group(1), int(base_match.group(2))
        if "-" not in base:
            return _ratio_position(base, percent)
        vertical_edge, horizontal_edge = base.split("-")
        offset = _shift(horizontal_edge, percent)
        return CoordinatePosition(
            horizontal_alignment="center",
            vertical_alignment=vertical_edge,
            horizontal_offset=offset,
        )

    logger.warning("Unknown position keyword %r, defaulting to center", keyword)
    return CoordinatePosition()


def _shift(edge: str, percent: int) -> float:
    if edge in {"right", "bottom"}:
        return float(50 - percent)
    return float(percent - 50)


def _ratio_position(edge: str, percent: int) -> CoordinatePosition:
    offset = _shift(edge, percent)
    if edge in {"left", "right"}:
        return CoordinatePosition(horizontal_offset=offset)
    return CoordinatePosition(vertical_offset=offset)


def upgrade_rule_document_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a raw rule document with keyword positions translated.

    Documents that predate channels (a bare ``{"layouts": [...]}``) are wrapped in a single
    default channel.
    """
    upgraded = copy.deepcopy(payload)
    if "channels" not in upgraded and "layouts" in upgraded:
        upgraded = {
            "channels": [
                {
                    "id": DEFAULT_CHANNEL_ID,
                    "name": "Default",
                    "layouts": upgraded.pop("layouts") or [],
                }
            ]
        }

    for channel in upgraded.get("channels") or []:
        for layout in channel.get("layouts") or []:
            for option in layout.get("options") or []:
                positioning = (option.get("rules") or {}).get("positioning") or {}
                for rule in positioning.values():
                    if not isinstance(rule, dict) or "coordinatePosition" in rule:
                        continue
                    keyword = rule.pop("position", None)
                    if keyword is None:
                        continue
                    rule["coordinatePosition"] = coordinate_position_from_keyword(keyword).to_dict()
    return upgraded
