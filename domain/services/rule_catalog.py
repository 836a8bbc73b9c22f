from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from domain.errors import LayoutNotFoundError, OptionNotFoundError
from domain.models import Channel, Layout, LayoutOption, LayoutRules, RuleDocument


@dataclass(frozen=True)
class OptionMatch:
    channel: Channel
    layout: Layout
    option: LayoutOption


@dataclass(frozen=True)
class AvailableOption:
    channel_id: str
    name: str
    aspect_ratio: str
    width: int
    height: int


def iter_options(document: RuleDocument):
    for channel in document.channels:
        for layout in channel.layouts:
            for option in layout.options:
                yield OptionMatch(channel=channel, layout=layout, option=option)


def find_option(document: RuleDocument, option_name: str) -> Optional[OptionMatch]:
    for match in iter_options(document):
        if match.option.name == option_name:
            return match
    return None


def require_option(document: RuleDocument, option_name: str) -> OptionMatch:
    match = find_option(document, option_name)
    if match is None:
        msg = f'Layout option "{option_name}" not found'
        raise OptionNotFoundError(msg)
    return match


def find_layout(document: RuleDocument, channel_id: str, aspect_ratio: str) -> Optional[Layout]:
    for channel in document.channels:
        if channel.id != channel_id:
            continue
        for layout in channel.layouts:
            if layout.aspect_ratio == aspect_ratio:
                return layout
    return None


def require_layout(document: RuleDocument, channel_id: str, aspect_ratio: str) -> Layout:
    layout = find_layout(document, channel_id, aspect_ratio)
    if layout is None:
        msg = f'Layout "{aspect_ratio}" not found in channel "{channel_id}"'
        raise LayoutNotFoundError(msg)
    return layout


def list_available_options(
    document: RuleDocument,
    channel_id: str | None = None,
    aspect_ratio: str | None = None,
) -> List[AvailableOption]:
    result: List[AvailableOption] = []
    for match in iter_options(document):
        if channel_id is not None and match.channel.id != channel_id:
            continue
        if aspect_ratio is not None and match.layout.aspect_ratio != aspect_ratio:
            continue
        result.append(
            AvailableOption(
                channel_id=match.channel.id,
                name=match.option.name,
                aspect_ratio=match.layout.aspect_ratio,
                width=match.layout.width,
                height=match.layout.height,
            )
        )
    return result


def resolve_render_order(rules: LayoutRules) -> List[str]:
    ordered: List[str] = []
    seen: set[str] = set()
    for role in rules.render_order or []:
        if role in rules.positioning and role not in seen:
            ordered.append(role)
            seen.add(role)
    for role in rules.positioning:
        if role not in seen:
            ordered.append(role)
            seen.add(role)
    return ordered
