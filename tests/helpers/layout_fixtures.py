from __future__ import annotations

from typing import Any, Dict, List, Optional

from domain.models import (
    Bounds,
    CoordinatePosition,
    PositioningRule,
    RuleDocument,
    SourceElement,
)


def bounds(left: float, top: float, width: float, height: float) -> Bounds:
    return Bounds(top=top, left=left, bottom=top + height, right=left + width)


def leaf(
    element_id: str,
    *,
    name: str | None = None,
    box: Optional[Bounds] = None,
    visible: bool = True,
) -> SourceElement:
    return SourceElement(
        id=element_id,
        name=name or element_id,
        type="layer",
        bounds=box if box is not None else bounds(0, 0, 200, 100),
        visible=visible,
    )


def group(
    element_id: str,
    children: List[SourceElement],
    *,
    name: str | None = None,
    box: Optional[Bounds] = None,
    visible: bool = True,
) -> SourceElement:
    return SourceElement(
        id=element_id,
        name=name or element_id,
        type="group",
        bounds=box,
        visible=visible,
        children=children,
    )


def positioning(
    max_width: float = 0.3,
    max_height: float = 0.3,
    *,
    horizontal: str = "center",
    vertical: str = "middle",
    apply_safezone: bool = True,
    **coordinates: float,
) -> PositioningRule:
    return PositioningRule(
        max_width_percent=max_width,
        max_height_percent=max_height,
        apply_safezone=apply_safezone,
        coordinate_position=CoordinatePosition(
            horizontal_alignment=horizontal,
            vertical_alignment=vertical,
            **coordinates,
        ),
    )


def rule_payload(
    positioning_rules: Dict[str, Dict[str, Any]],
    *,
    option_name: str = "square-default",
    width: int = 1080,
    height: int = 1080,
    aspect_ratio: str = "1:1",
    visibility: Dict[str, bool] | None = None,
    render_order: List[str] | None = None,
    safezone_margin: float | None = None,
) -> Dict[str, Any]:
    option: Dict[str, Any] = {
        "name": option_name,
        "rules": {
            "visibility": visibility or {role: True for role in positioning_rules},
            "positioning": positioning_rules,
        },
    }
    if render_order is not None:
        option["rules"]["renderOrder"] = render_order
    if safezone_margin is not None:
        option["safezoneMargin"] = safezone_margin
    return {
        "channels": [
            {
                "id": "meta",
                "name": "Meta",
                "layouts": [
                    {
                        "aspectRatio": aspect_ratio,
                        "width": width,
                        "height": height,
                        "options": [option],
                    }
                ],
            }
        ]
    }


def rule_document(positioning_rules: Dict[str, Dict[str, Any]], **kwargs: Any) -> RuleDocument:
    return RuleDocument.model_validate(rule_payload(positioning_rules, **kwargs))


def coordinate_rule(
    max_width: float = 0.3,
    max_height: float = 0.3,
    *,
    horizontal: str = "center",
    vertical: str = "middle",
    **extra: Any,
) -> Dict[str, Any]:
    coordinate: Dict[str, Any] = {
        "horizontalAlignment": horizontal,
        "verticalAlignment": vertical,
    }
    for key in ("horizontalOffset", "verticalOffset", "customX", "customY"):
        if key in extra:
            coordinate[key] = extra.pop(key)
    return {
        "maxWidthPercent": max_width,
        "maxHeightPercent": max_height,
        "coordinatePosition": coordinate,
        **extra,
    }


def multi_channel_payload() -> Dict[str, Any]:
    return {
        "channels": [
            {
                "id": "meta",
                "name": "Meta",
                "layouts": [
                    {
                        "aspectRatio": "1:1",
                        "width": 1080,
                        "height": 1080,
                        "options": [
                            {"name": "feed-square", "rules": {"positioning": {}}},
                            {"name": "feed-square-alt", "rules": {"positioning": {}}},
                        ],
                    },
                    {
                        "aspectRatio": "9:16",
                        "width": 1080,
                        "height": 1920,
                        "options": [{"name": "story", "rules": {"positioning": {}}}],
                    },
                ],
            },
            {
                "id": "display",
                "name": "Display",
                "layouts": [
                    {
                        "aspectRatio": "16:9",
                        "width": 1920,
                        "height": 1080,
                        "options": [{"name": "banner", "rules": {"positioning": {}}}],
                    }
                ],
            },
        ]
    }
