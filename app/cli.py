from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from pydantic import TypeAdapter, ValidationError
from rich.console import Console
from rich.table import Table

from adapters.filesystem.json_utils import load_json_value
from app.config import AppSettings, load_settings
from app.wiring import (
    build_element_tree_repository,
    build_label_map_repository,
    build_label_vocabulary_repository,
    build_layout_assembler,
    build_layout_repository,
    build_rule_repository,
    configure_logging,
)
from domain.errors import (
    DuplicateLabelError,
    DuplicateOptionError,
    LabelNotFoundError,
    LayoutNotFoundError,
    OptionNotFoundError,
)
from domain.models import GeneratedLayout, RuleDocument, SourceElement
from domain.services.aspect_ratios import (
    calculate_aspect_ratio,
    nearest_standard_ratio,
    target_ratios,
)
from domain.services.label_authoring import (
    add_label,
    assign_role,
    remove_label,
    rename_assignments,
    rename_label,
    unassign_role,
)
from domain.services.rule_authoring import (
    add_option,
    clone_option,
    remove_option,
    set_render_order,
)
from domain.services.rule_catalog import list_available_options

app = typer.Typer(no_args_is_help=True)
options_app = typer.Typer(no_args_is_help=True)
labels_app = typer.Typer(no_args_is_help=True)
app.add_typer(options_app, name="options")
app.add_typer(labels_app, name="labels")
console = Console()

_VISIBILITY_ADAPTER = TypeAdapter(dict[str, bool])


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    try:
        settings = load_settings(config)
    except (FileNotFoundError, ValidationError) as exc:
        console.print(f"[red]Invalid configuration:[/] {exc}")
        raise typer.Exit(code=1) from exc
    configure_logging(settings)
    ctx.obj = settings


def _settings(ctx: typer.Context) -> AppSettings:
    if isinstance(ctx.obj, AppSettings):
        return ctx.obj
    return load_settings()


def _load_rules(settings: AppSettings, rules_path: Path) -> RuleDocument:
    try:
        return build_rule_repository(settings).load(rules_path)
    except FileNotFoundError as exc:
        console.print(f"[red]File not found:[/] {rules_path}")
        raise typer.Exit(code=1) from exc
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Invalid layout rules:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _load_tree(settings: AppSettings, tree_path: Path) -> list[SourceElement]:
    try:
        return build_element_tree_repository(settings).load(tree_path)
    except FileNotFoundError as exc:
        console.print(f"[red]File not found:[/] {tree_path}")
        raise typer.Exit(code=1) from exc
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Invalid element tree:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _load_overrides(path: Optional[Path]) -> dict[str, bool]:
    if path is None:
        return {}
    try:
        return _VISIBILITY_ADAPTER.validate_python(load_json_value(path))
    except FileNotFoundError as exc:
        console.print(f"[red]File not found:[/] {path}")
        raise typer.Exit(code=1) from exc
    except (ValidationError, ValueError) as exc:
        console.print(f"[red]Invalid visibility overrides:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _render_layout(layout: GeneratedLayout) -> None:
    table = Table(title=f"{layout.name} ({layout.aspect_ratio}, {layout.width}x{layout.height})")
    for column in ("role", "name", "x", "y", "width", "height", "visible"):
        table.add_column(column)
    for element in layout.elements:
        table.add_row(
            element.role,
            element.name,
            f"{element.x:.1f}",
            f"{element.y:.1f}",
            str(element.width),
            str(element.height),
            "yes" if element.visible else "[dim]no[/]",
        )
    console.print(table)


@app.command("generate")
def generate(
    ctx: typer.Context,
    option_name: str = typer.Argument(..., help="Layout option to generate."),
    tree: Path = typer.Option(..., help="Decoded element tree JSON."),
    labels: Optional[Path] = typer.Option(None, help="Element id to role JSON map."),
    rules: Optional[Path] = typer.Option(None, help="Layout rules JSON document."),
    visibility: Optional[Path] = typer.Option(None, help="Element id to visibility overrides."),
    output: Optional[Path] = typer.Option(None, help="Write the generated layout to this file."),
) -> None:
    settings = _settings(ctx)
    document = _load_rules(settings, rules or settings.layout.rules_path)
    elements = _load_tree(settings, tree)
    label_map = build_label_map_repository(settings).load(labels or settings.layout.label_map_path)

    layout = build_layout_assembler(settings).generate(
        option_name,
        elements,
        label_map,
        document,
        visibility_overrides=_load_overrides(visibility),
    )
    if layout is None:
        console.print(f'[red]Layout option "{option_name}" not found[/]')
        raise typer.Exit(code=1)

    if output is not None:
        build_layout_repository(settings).save(layout, output)
        console.print(f"[green]Wrote[/] {output}")
        return
    _render_layout(layout)


@app.command("generate-all")
def generate_all(
    ctx: typer.Context,
    tree: Path = typer.Option(..., help="Decoded element tree JSON."),
    labels: Optional[Path] = typer.Option(None, help="Element id to role JSON map."),
    rules: Optional[Path] = typer.Option(None, help="Layout rules JSON document."),
    channel: Optional[str] = typer.Option(None, help="Only options of this channel id."),
    aspect_ratio: Optional[str] = typer.Option(None, help="Only options of this aspect ratio."),
    visibility: Optional[Path] = typer.Option(None, help="Element id to visibility overrides."),
    output_dir: Optional[Path] = typer.Option(None, help="Directory for generated layouts."),
) -> None:
    settings = _settings(ctx)
    document = _load_rules(settings, rules or settings.layout.rules_path)
    elements = _load_tree(settings, tree)
    label_map = build_label_map_repository(settings).load(labels or settings.layout.label_map_path)

    layouts = build_layout_assembler(settings).generate_all(
        elements,
        label_map,
        document,
        channel_id=channel,
        aspect_ratio=aspect_ratio,
        visibility_overrides=_load_overrides(visibility),
    )
    if not layouts:
        console.print("[yellow]No matching layout options found[/]")
        raise typer.Exit(code=0)

    target_dir = output_dir or settings.layout.output_dir
    for path in build_layout_repository(settings).save_all(layouts, target_dir):
        console.print(f"[green]Wrote[/] {path}")


@options_app.command("list")
def list_options(
    ctx: typer.Context,
    rules: Optional[Path] = typer.Option(None, help="Layout rules JSON document."),
    channel: Optional[str] = typer.Option(None, help="Only options of this channel id."),
    aspect_ratio: Optional[str] = typer.Option(None, help="Only options of this aspect ratio."),
) -> None:
    settings = _settings(ctx)
    document = _load_rules(settings, rules or settings.layout.rules_path)
    available = list_available_options(document, channel_id=channel, aspect_ratio=aspect_ratio)
    if not available:
        console.print("[yellow]No layout options defined[/]")
        return
    table = Table()
    for column in ("channel", "option", "aspect ratio", "size"):
        table.add_column(column)
    for item in available:
        table.add_row(item.channel_id, item.name, item.aspect_ratio, f"{item.width}x{item.height}")
    console.print(table)


def _save_rules(settings: AppSettings, document: RuleDocument, rules_path: Path) -> None:
    build_rule_repository(settings).save(document, rules_path)
    console.print(f"[green]Wrote[/] {rules_path}")


@options_app.command("add")
def add_layout_option(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Name of the new option."),
    channel: str = typer.Option(..., help="Channel id."),
    aspect_ratio: str = typer.Option(..., help="Aspect ratio of the target layout, e.g. 1:1."),
    rules: Optional[Path] = typer.Option(None, help="Layout rules JSON document."),
    labels: Optional[Path] = typer.Option(None, help="Label vocabulary JSON."),
) -> None:
    settings = _settings(ctx)
    rules_path = rules or settings.layout.rules_path
    document = _load_rules(settings, rules_path)
    roles = build_label_vocabulary_repository(settings).load(labels or settings.layout.labels_path)
    try:
        updated = add_option(document, channel, aspect_ratio, name, roles)
    except (LayoutNotFoundError, DuplicateOptionError, ValueError) as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    _save_rules(settings, updated, rules_path)


@options_app.command("clone")
def clone_layout_option(
    ctx: typer.Context,
    source: str = typer.Argument(..., help="Option to copy."),
    name: str = typer.Argument(..., help="Name of the copy."),
    channel: str = typer.Option(..., help="Target channel id."),
    aspect_ratio: str = typer.Option(..., help="Target aspect ratio."),
    rules: Optional[Path] = typer.Option(None, help="Layout rules JSON document."),
) -> None:
    settings = _settings(ctx)
    rules_path = rules or settings.layout.rules_path
    document = _load_rules(settings, rules_path)
    try:
        updated = clone_option(document, source, channel, aspect_ratio, name)
    except (OptionNotFoundError, LayoutNotFoundError, DuplicateOptionError, ValueError) as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    _save_rules(settings, updated, rules_path)


@options_app.command("remove")
def remove_layout_option(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Option to delete."),
    rules: Optional[Path] = typer.Option(None, help="Layout rules JSON document."),
) -> None:
    settings = _settings(ctx)
    rules_path = rules or settings.layout.rules_path
    document = _load_rules(settings, rules_path)
    try:
        updated = remove_option(document, name)
    except OptionNotFoundError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    _save_rules(settings, updated, rules_path)


@options_app.command("order")
def order_layout_option(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Option to reorder."),
    roles: List[str] = typer.Argument(..., help="Roles in paint order, bottom first."),
    rules: Optional[Path] = typer.Option(None, help="Layout rules JSON document."),
) -> None:
    settings = _settings(ctx)
    rules_path = rules or settings.layout.rules_path
    document = _load_rules(settings, rules_path)
    try:
        updated = set_render_order(document, name, roles)
    except OptionNotFoundError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    _save_rules(settings, updated, rules_path)


@labels_app.command("list")
def list_labels(
    ctx: typer.Context,
    labels: Optional[Path] = typer.Option(None, help="Label vocabulary JSON."),
) -> None:
    settings = _settings(ctx)
    for label in build_label_vocabulary_repository(settings).load(
        labels or settings.layout.labels_path
    ):
        console.print(label)


def _save_labels(settings: AppSettings, labels: list[str], labels_path: Path) -> None:
    build_label_vocabulary_repository(settings).save(labels, labels_path)
    console.print(f"[green]Wrote[/] {labels_path}")


def _save_label_map(settings: AppSettings, label_map: dict[str, str], map_path: Path) -> None:
    build_label_map_repository(settings).save(label_map, map_path)
    console.print(f"[green]Wrote[/] {map_path}")


@labels_app.command("add")
def add_vocabulary_label(
    ctx: typer.Context,
    label: str = typer.Argument(..., help="Label to add."),
    labels: Optional[Path] = typer.Option(None, help="Label vocabulary JSON."),
) -> None:
    settings = _settings(ctx)
    labels_path = labels or settings.layout.labels_path
    current = build_label_vocabulary_repository(settings).load(labels_path)
    try:
        updated = add_label(current, label)
    except (DuplicateLabelError, ValueError) as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    _save_labels(settings, updated, labels_path)


@labels_app.command("rename")
def rename_vocabulary_label(
    ctx: typer.Context,
    old_label: str = typer.Argument(..., help="Label to rename."),
    new_label: str = typer.Argument(..., help="New label."),
    labels: Optional[Path] = typer.Option(None, help="Label vocabulary JSON."),
    label_map: Optional[Path] = typer.Option(None, help="Element id to role JSON map."),
) -> None:
    settings = _settings(ctx)
    labels_path = labels or settings.layout.labels_path
    map_path = label_map or settings.layout.label_map_path
    current = build_label_vocabulary_repository(settings).load(labels_path)
    try:
        updated = rename_label(current, old_label, new_label)
    except (LabelNotFoundError, DuplicateLabelError, ValueError) as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    _save_labels(settings, updated, labels_path)

    assignments = build_label_map_repository(settings).load(map_path)
    if old_label in assignments.values():
        renamed = rename_assignments(assignments, old_label, new_label.strip())
        _save_label_map(settings, renamed, map_path)


@labels_app.command("remove")
def remove_vocabulary_label(
    ctx: typer.Context,
    label: str = typer.Argument(..., help="Label to delete."),
    labels: Optional[Path] = typer.Option(None, help="Label vocabulary JSON."),
) -> None:
    settings = _settings(ctx)
    labels_path = labels or settings.layout.labels_path
    current = build_label_vocabulary_repository(settings).load(labels_path)
    try:
        updated = remove_label(current, label)
    except LabelNotFoundError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    _save_labels(settings, updated, labels_path)


@labels_app.command("assign")
def assign_element_role(
    ctx: typer.Context,
    element_id: str = typer.Argument(..., help="Element id in the element tree."),
    role: str = typer.Argument(..., help="Label from the vocabulary."),
    labels: Optional[Path] = typer.Option(None, help="Label vocabulary JSON."),
    label_map: Optional[Path] = typer.Option(None, help="Element id to role JSON map."),
) -> None:
    settings = _settings(ctx)
    map_path = label_map or settings.layout.label_map_path
    vocabulary = build_label_vocabulary_repository(settings).load(
        labels or settings.layout.labels_path
    )
    assignments = build_label_map_repository(settings).load(map_path)
    try:
        updated = assign_role(assignments, element_id, role, vocabulary)
    except (LabelNotFoundError, ValueError) as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    _save_label_map(settings, updated, map_path)


@labels_app.command("unassign")
def unassign_element_role(
    ctx: typer.Context,
    element_id: str = typer.Argument(..., help="Element id to clear."),
    label_map: Optional[Path] = typer.Option(None, help="Element id to role JSON map."),
) -> None:
    settings = _settings(ctx)
    map_path = label_map or settings.layout.label_map_path
    assignments = build_label_map_repository(settings).load(map_path)
    try:
        updated = unassign_role(assignments, element_id)
    except LabelNotFoundError as exc:
        console.print(f"[red]{exc}[/]")
        raise typer.Exit(code=1) from exc
    _save_label_map(settings, updated, map_path)


@app.command("validate")
def validate(
    ctx: typer.Context,
    input_path: Path = typer.Argument(..., help="Layout rules file to validate."),
) -> None:
    if not input_path.exists():
        console.print(f"[red]File not found:[/] {input_path}")
        raise typer.Exit(code=1)

    try:
        document = build_rule_repository(_settings(ctx)).load(input_path)
    except Exception as exc:  # noqa: BLE001
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    count = len(list_available_options(document))
    console.print(f"[green]Valid layout rules:[/] {input_path} ({count} options)")


@app.command("ratios")
def ratios(
    width: int = typer.Argument(..., help="Master design width in pixels."),
    height: int = typer.Argument(..., help="Master design height in pixels."),
) -> None:
    if width <= 0 or height <= 0:
        console.print("[red]Width and height must be positive[/]")
        raise typer.Exit(code=1)
    nearest = nearest_standard_ratio(width, height)
    console.print(f"Exact ratio: {calculate_aspect_ratio(width, height)}")
    console.print(f"Nearest standard ratio: {nearest}")
    console.print(f"Suggested targets: {', '.join(target_ratios(nearest))}")


if __name__ == "__main__":
    app()
