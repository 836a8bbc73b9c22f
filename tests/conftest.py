from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from adapters.layout.safezone import SafezoneGeometryEngine
from app.config import AppSettings, LayoutSettings
from domain.services.generate_layout import LayoutAssembler


def _clear_layout_env() -> None:
    for key in list(os.environ):
        if key.startswith("LAYOUT_"):
            os.environ.pop(key, None)


_clear_layout_env()


@pytest.fixture(autouse=True)
def clear_layout_env() -> Generator[None, None, None]:
    _clear_layout_env()
    yield
    _clear_layout_env()


@pytest.fixture
def engine() -> SafezoneGeometryEngine:
    return SafezoneGeometryEngine()


@pytest.fixture
def assembler(engine: SafezoneGeometryEngine) -> LayoutAssembler:
    return LayoutAssembler(engine)


@pytest.fixture
def layout_settings(tmp_path: Path) -> LayoutSettings:
    return LayoutSettings(
        rules_path=tmp_path / "layoutRules.json",
        labels_path=tmp_path / "labels.json",
        label_map_path=tmp_path / "layer_labels.json",
        output_dir=tmp_path / "generated",
        derive_group_bounds=True,
        log_level="WARNING",
    )


@pytest.fixture
def layout_settings_factory(layout_settings: LayoutSettings) -> Callable[..., LayoutSettings]:
    def _factory(**overrides: object) -> LayoutSettings:
        return layout_settings.model_copy(update=overrides)

    return _factory


@pytest.fixture
def app_settings(layout_settings: LayoutSettings) -> AppSettings:
    return AppSettings(layout=layout_settings)
