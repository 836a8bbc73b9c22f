from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from typing import List

from domain.errors import DuplicateOptionError
from domain.models import (
    Channel,
    CoordinatePosition,
    Layout,
    LayoutOption,
    LayoutRules,
    PositioningRule,
    RuleDocument,
)
from domain.services.rule_catalog import require_layout, require_option

DEFAULT_MAX_PERCENT = 0.5


def default_rules(roles: Iterable[str]) -> LayoutRules:
    ordered = list(dict.fromkeys(roles))
    return LayoutRules(
        visibility={role: True for role in ordered},
        positioning={
            role: PositioningRule(
                max_width_percent=DEFAULT_MAX_PERCENT,
                max_height_percent=DEFAULT_MAX_PERCENT,
                coordinate_position=CoordinatePosition(),
            )
            for role in ordered
        },
    )


def add_option(
    document: RuleDocument,
    channel_id: str,
    aspect_ratio: str,
    name: str,
    roles: Iterable[str],
) -> RuleDocument:
    option = LayoutOption(name=_clean_name(name), rules=default_rules(roles))
    return _append_option(document, channel_id, aspect_ratio, option)


def clone_option(
    document: RuleDocument,
    source_name: str,
    channel_id: str,
    aspect_ratio: str,
    new_name: str,
) -> RuleDocument:
    source = require_option(document, source_name).option
    cloned = source.model_copy(update={"name": _clean_name(new_name)}, deep=True)
    return _append_option(document, channel_id, aspect_ratio, cloned)


def remove_option(document: RuleDocument, name: str) -> RuleDocument:
    match = require_option(document, name)

    def update(_channel: Channel, layout: Layout) -> Layout:
        if layout is not match.layout:
            return layout
        return layout.model_copy(
            update={"options": [option for option in layout.options if option.name != name]}
        )

    return _map_layouts(document, update)


def set_render_order(document: RuleDocument, name: str, order: Sequence[str]) -> RuleDocument:
    match = require_option(document, name)

    def update(_channel: Channel, layout: Layout) -> Layout:
        if layout is not match.layout:
            return layout
        options: List[LayoutOption] = []
        for option in layout.options:
            if option.name == name:
                rules = option.rules.model_copy(update={"render_order": list(order)})
                option = option.model_copy(update={"rules": rules})
            options.append(option)
        return layout.model_copy(update={"options": options})

    return _map_layouts(document, update)


def _clean_name(name: str) -> str:
    cleaned = str(name or "").strip()
    if not cleaned:
        msg = "Option name must not be empty"
        raise ValueError(msg)
    return cleaned


def _append_option(
    document: RuleDocument,
    channel_id: str,
    aspect_ratio: str,
    option: LayoutOption,
) -> RuleDocument:
    target = require_layout(document, channel_id, aspect_ratio)
    if any(existing.name == option.name for existing in target.options):
        msg = f'An option named "{option.name}" already exists in {channel_id} {aspect_ratio}'
        raise DuplicateOptionError(msg)

    def update(_channel: Channel, layout: Layout) -> Layout:
        if layout is not target:
            return layout
        return layout.model_copy(update={"options": [*layout.options, option]})

    return _map_layouts(document, update)


def _map_layouts(
    document: RuleDocument,
    update: Callable[[Channel, Layout], Layout],
) -> RuleDocument:
    channels = [
        channel.model_copy(
            update={"layouts": [update(channel, layout) for layout in channel.layouts]}
        )
        for channel in document.channels
    ]
    return document.model_copy(update={"channels": channels})

