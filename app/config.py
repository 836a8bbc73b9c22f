from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, ClassVar

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from pydantic_settings.sources import PydanticBaseSettingsSource, YamlConfigSettingsSource

from domain.models import DEFAULT_LABELS

DEFAULT_CONFIG_PATH = Path("config/layout.yaml")

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


def _split_string_list_value(raw_value: str) -> list[str]:
    raw = raw_value.strip()
    if raw.startswith("[") and raw.endswith("]"):
        raw = raw[1:-1].strip()
    if not raw:
        return []
    return [
        token for token in (part.strip().strip("'").strip('"') for part in raw.split(",")) if token
    ]


class LayoutSettings(BaseModel):
    rules_path: Path = Path("data/layoutRules.json")
    labels_path: Path = Path("data/labels.json")
    label_map_path: Path = Path("data/layer_labels.json")
    output_dir: Path = Path("data/generated")
    derive_group_bounds: bool = True
    log_level: str = "WARNING"
    default_labels: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_LABELS)
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> str:
        level = str(value or "WARNING").strip().upper()
        if level not in _LOG_LEVELS:
            msg = f"layout.log_level must be one of {sorted(_LOG_LEVELS)}, got {value!r}"
            raise ValueError(msg)
        return level

    @field_validator("default_labels", mode="before")
    @classmethod
    def normalize_labels(cls, value: object) -> list[str]:
        if value is None:
            return []
        if isinstance(value, list):
            normalized: list[str] = []
            for item in value:
                normalized.extend(_split_string_list_value(str(item)))
            return normalized
        return _split_string_list_value(str(value))


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LAYOUT_", env_nested_delimiter="__")

    layout: LayoutSettings = LayoutSettings()

    _yaml_path: ClassVar[Path | None] = None

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: list[PydanticBaseSettingsSource] = [
            init_settings,
            env_settings,
            dotenv_settings,
            file_secret_settings,
        ]
        if cls._yaml_path:
            sources.append(YamlConfigSettingsSource(settings_cls, yaml_file=cls._yaml_path))
        return tuple(sources)


def load_settings(config_path: Path | None = None) -> AppSettings:
    env_path = os.getenv("LAYOUT_CONFIG_PATH")
    resolved_path: Path | None = None

    if config_path is not None:
        resolved_path = config_path
    elif env_path:
        resolved_path = Path(env_path)
    elif DEFAULT_CONFIG_PATH.exists():
        resolved_path = DEFAULT_CONFIG_PATH

    previous = AppSettings._yaml_path
    try:
        if resolved_path is not None:
            if not resolved_path.exists():
                msg = f"Config file not found: {resolved_path}"
                raise FileNotFoundError(msg)
            AppSettings._yaml_path = resolved_path
        return AppSettings()
    finally:
        AppSettings._yaml_path = previous
