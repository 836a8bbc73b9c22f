from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import List, Optional

from domain.element_tree import ElementIndex
from domain.models import GeneratedElement, GeneratedLayout, RuleDocument, SourceElement
from domain.ports.layout import GeometryEngine
from domain.services.resolve_labels import resolve_labeled_elements
from domain.services.rule_catalog import (
    OptionMatch,
    find_option,
    iter_options,
    resolve_render_order,
)

logger = logging.getLogger(__name__)


class LayoutAssembler:
    def __init__(self, engine: GeometryEngine) -> None:
        self.engine = engine

    def generate(
        self,
        option_name: str,
        tree: Sequence[SourceElement],
        label_map: Mapping[str, str],
        document: RuleDocument,
        *,
        visibility_overrides: Mapping[str, bool] | None = None,
    ) -> Optional[GeneratedLayout]:
        match = find_option(document, option_name)
        if match is None:
            logger.warning('Layout option "%s" not found', option_name)
            return None
        return self.generate_for(match, tree, label_map, visibility_overrides=visibility_overrides)

    def generate_all(
        self,
        tree: Sequence[SourceElement],
        label_map: Mapping[str, str],
        document: RuleDocument,
        *,
        channel_id: str | None = None,
        aspect_ratio: str | None = None,
        visibility_overrides: Mapping[str, bool] | None = None,
    ) -> List[GeneratedLayout]:
        layouts: List[GeneratedLayout] = []
        for match in iter_options(document):
            if channel_id is not None and match.channel.id != channel_id:
                continue
            if aspect_ratio is not None and match.layout.aspect_ratio != aspect_ratio:
                continue
            layouts.append(
                self.generate_for(match, tree, label_map, visibility_overrides=visibility_overrides)
            )
        return layouts

    def generate_for(
        self,
        match: OptionMatch,
        tree: Sequence[SourceElement],
        label_map: Mapping[str, str],
        *,
        visibility_overrides: Mapping[str, bool] | None = None,
    ) -> GeneratedLayout:
        layout = match.layout
        option = match.option
        rules = option.rules
        overrides = dict(visibility_overrides or {})
        margin = option.effective_safezone_margin
        logger.debug(
            "Generating layout %s (%sx%s, %s)",
            option.name,
            layout.width,
            layout.height,
            layout.aspect_ratio,
        )

        index = ElementIndex(tree)
        labeled = resolve_labeled_elements(tree, label_map, rules.positioning.keys())
        elements: List[GeneratedElement] = []

        for role in resolve_render_order(rules):
            members = labeled.get(role) or []
            rule = rules.positioning.get(role)
            if not members or rule is None:
                continue
            role_visible = rules.is_role_visible(role)

            for element in members:
                visible = role_visible and index.is_visible(element, overrides)
                size = self.engine.size(
                    element.bounds,
                    layout.width,
                    layout.height,
                    rule.max_width_percent,
                    rule.max_height_percent,
                    role,
                )
                position = self.engine.position(
                    rule.coordinate_position,
                    size,
                    layout.width,
                    layout.height,
                    margin,
                    rule.apply_safezone,
                    role,
                )
                if size.is_empty:
                    logger.debug("Element %s (%s) has no area", element.name, role)
                elements.append(
                    GeneratedElement(
                        id=element.id,
                        name=element.name,
                        role=role,
                        x=position.x,
                        y=position.y,
                        width=size.width,
                        height=size.height,
                        visible=visible,
                        parent=index.parent_id(element.id),
                        original_bounds=element.bounds,
                        coordinate_position=rule.coordinate_position,
                    )
                )

        logger.debug("Generated %s elements for layout %s", len(elements), option.name)
        return GeneratedLayout(
            name=option.name,
            width=layout.width,
            height=layout.height,
            aspect_ratio=layout.aspect_ratio,
            elements=elements,
            rules=rules,
        )
