from __future__ import annotations

import logging

import pytest

from domain.models import RuleDocument
from domain.services.generate_layout import LayoutAssembler
from tests.helpers.layout_fixtures import (
    bounds,
    coordinate_rule,
    group,
    leaf,
    multi_channel_payload,
    rule_document,
)


def _logo_document(**kwargs: object) -> RuleDocument:
    return rule_document(
        {"logo": coordinate_rule(0.3, 0.3, horizontal="right", vertical="top")},
        **kwargs,
    )


def test_logo_is_placed_top_right_inside_safezone(assembler: LayoutAssembler) -> None:
    tree = [leaf("logo_layer", box=bounds(0, 0, 200, 100))]

    layout = assembler.generate("square-default", tree, {"logo_layer": "logo"}, _logo_document())

    assert layout is not None
    assert (layout.name, layout.width, layout.height, layout.aspect_ratio) == (
        "square-default",
        1080,
        1080,
        "1:1",
    )
    [element] = layout.elements
    assert element.role == "logo"
    assert (element.width, element.height) == (324, 162)
    assert element.x == pytest.approx(734.4)
    assert element.y == pytest.approx(21.6)
    assert element.visible is True
    assert element.original_bounds == bounds(0, 0, 200, 100)
    assert element.coordinate_position is not None
    assert element.coordinate_position.horizontal_alignment == "right"


def test_unknown_option_returns_none_and_warns(
    assembler: LayoutAssembler,
    caplog: pytest.LogCaptureFixture,
) -> None:
    with caplog.at_level(logging.WARNING):
        layout = assembler.generate("missing", [leaf("a")], {"a": "logo"}, _logo_document())

    assert layout is None
    assert 'Layout option "missing" not found' in caplog.text


def test_generation_is_repeatable(assembler: LayoutAssembler) -> None:
    tree = [group("cta_group", [leaf("cta_text"), leaf("cta_button")]), leaf("logo_layer")]
    labels = {"cta_group": "cta", "logo_layer": "logo"}
    document = rule_document(
        {
            "logo": coordinate_rule(0.2, 0.2, horizontal="left", vertical="top"),
            "cta": coordinate_rule(0.4, 0.1, vertical="bottom", verticalOffset=-5),
        }
    )

    first = assembler.generate("square-default", tree, labels, document)
    second = assembler.generate("square-default", tree, labels, document)

    assert first == second


def test_elements_follow_render_order_then_remaining_roles(assembler: LayoutAssembler) -> None:
    tree = [
        leaf("bg", box=bounds(0, 0, 1920, 1080)),
        leaf("logo_layer"),
        leaf("cta_layer"),
        leaf("legal"),
    ]
    labels = {"bg": "background", "logo_layer": "logo", "cta_layer": "cta", "legal": "disclaimer"}
    document = rule_document(
        {
            "logo": coordinate_rule(),
            "disclaimer": coordinate_rule(),
            "background": coordinate_rule(1.0, 1.0),
            "cta": coordinate_rule(),
        },
        render_order=["background", "cta", "unpositioned", "cta"],
    )

    layout = assembler.generate("square-default", tree, labels, document)

    assert layout is not None
    assert [element.role for element in layout.elements] == [
        "background",
        "cta",
        "logo",
        "disclaimer",
    ]


def test_group_and_inheriting_children_are_emitted_in_tree_order(
    assembler: LayoutAssembler,
) -> None:
    tree = [group("cta_group", [leaf("cta_text"), leaf("cta_button")])]
    document = rule_document({"cta": coordinate_rule(0.5, 0.2, vertical="bottom")})

    layout = assembler.generate("square-default", tree, {"cta_group": "cta"}, document)

    assert layout is not None
    assert [element.id for element in layout.elements] == ["cta_group", "cta_text", "cta_button"]
    assert [element.parent for element in layout.elements] == [None, "cta_group", "cta_group"]
    assert all(element.role == "cta" for element in layout.elements)


def test_group_without_bounds_gets_empty_size(assembler: LayoutAssembler) -> None:
    tree = [group("cta_group", [leaf("cta_text")])]
    document = rule_document({"cta": coordinate_rule()})

    layout = assembler.generate("square-default", tree, {"cta_group": "cta"}, document)

    assert layout is not None
    group_element = layout.elements[0]
    assert (group_element.width, group_element.height) == (0, 0)
    assert group_element.original_bounds is None


def test_roles_without_positioning_rule_are_skipped(assembler: LayoutAssembler) -> None:
    tree = [leaf("logo_layer"), leaf("headline")]
    labels = {"logo_layer": "logo", "headline": "product-name"}

    layout = assembler.generate("square-default", tree, labels, _logo_document())

    assert layout is not None
    assert [element.id for element in layout.elements] == ["logo_layer"]


def test_positioned_role_without_members_emits_nothing(assembler: LayoutAssembler) -> None:
    layout = assembler.generate("square-default", [leaf("plain")], {}, _logo_document())

    assert layout is not None
    assert layout.elements == []


def test_role_hidden_by_visibility_rule(assembler: LayoutAssembler) -> None:
    tree = [leaf("logo_layer")]
    document = _logo_document(visibility={"logo": False})

    layout = assembler.generate("square-default", tree, {"logo_layer": "logo"}, document)

    assert layout is not None
    assert [element.visible for element in layout.elements] == [False]
    assert layout.visible_elements() == []


def test_role_missing_from_visibility_defaults_to_visible(assembler: LayoutAssembler) -> None:
    tree = [leaf("logo_layer")]
    document = _logo_document(visibility={"cta": False})

    layout = assembler.generate("square-default", tree, {"logo_layer": "logo"}, document)

    assert layout is not None
    assert layout.elements[0].visible is True


def test_hidden_ancestor_hides_element(assembler: LayoutAssembler) -> None:
    tree = [group("wrapper", [leaf("logo_layer")], visible=False)]

    layout = assembler.generate("square-default", tree, {"logo_layer": "logo"}, _logo_document())

    assert layout is not None
    [element] = layout.elements
    assert element.visible is False
    assert element.parent == "wrapper"


def test_visibility_overrides_replace_source_flags(assembler: LayoutAssembler) -> None:
    tree = [group("wrapper", [leaf("logo_layer", visible=False)], visible=False)]
    labels = {"logo_layer": "logo"}
    document = _logo_document()

    shown = assembler.generate(
        "square-default",
        tree,
        labels,
        document,
        visibility_overrides={"wrapper": True, "logo_layer": True},
    )
    hidden = assembler.generate(
        "square-default",
        [leaf("logo_layer")],
        labels,
        document,
        visibility_overrides={"logo_layer": False},
    )

    assert shown is not None and shown.elements[0].visible is True
    assert hidden is not None and hidden.elements[0].visible is False


def test_rules_are_echoed_on_the_generated_layout(assembler: LayoutAssembler) -> None:
    document = _logo_document(render_order=["logo"])

    layout = assembler.generate("square-default", [leaf("a")], {"a": "logo"}, document)

    assert layout is not None
    assert layout.rules == document.channels[0].layouts[0].options[0].rules


def test_option_safezone_margin_is_used(assembler: LayoutAssembler) -> None:
    tree = [leaf("logo_layer", box=bounds(0, 0, 100, 100))]
    document = rule_document(
        {"logo": coordinate_rule(0.1, 0.1, horizontal="left", vertical="top")},
        safezone_margin=0.1,
    )

    layout = assembler.generate("square-default", tree, {"logo_layer": "logo"}, document)

    assert layout is not None
    assert layout.elements[0].x == pytest.approx(108.0)
    assert layout.elements[0].y == pytest.approx(108.0)


def test_first_option_with_matching_name_wins(assembler: LayoutAssembler) -> None:
    payload = multi_channel_payload()
    payload["channels"][1]["layouts"][0]["options"][0]["name"] = "feed-square"
    document = RuleDocument.model_validate(payload)

    layout = assembler.generate("feed-square", [], {}, document)

    assert layout is not None
    assert (layout.width, layout.height) == (1080, 1080)


def test_generate_all_filters_by_channel_and_ratio(assembler: LayoutAssembler) -> None:
    document = RuleDocument.model_validate(multi_channel_payload())

    everything = assembler.generate_all([], {}, document)
    meta_square = assembler.generate_all([], {}, document, channel_id="meta", aspect_ratio="1:1")
    landscape = assembler.generate_all([], {}, document, aspect_ratio="16:9")

    assert [layout.name for layout in everything] == [
        "feed-square",
        "feed-square-alt",
        "story",
        "banner",
    ]
    assert [layout.name for layout in meta_square] == ["feed-square", "feed-square-alt"]
    assert [layout.name for layout in landscape] == ["banner"]
