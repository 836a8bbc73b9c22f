from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path

from adapters.filesystem.json_utils import write_json_atomic
from domain.models import GeneratedLayout
from domain.ports.repositories import GeneratedLayoutRepository

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def layout_file_name(layout: GeneratedLayout) -> str:
    ratio = layout.aspect_ratio.replace(":", "x")
    stem = _UNSAFE_CHARS.sub("-", f"{layout.name}-{ratio}").strip("-") or "layout"
    return f"{stem}.json"


class FileSystemGeneratedLayoutRepository(GeneratedLayoutRepository):
    def save(self, layout: GeneratedLayout, path: Path) -> None:
        write_json_atomic(path, layout.to_dict())

    def save_all(self, layouts: Sequence[GeneratedLayout], directory: Path) -> list[Path]:
        paths: list[Path] = []
        for layout in layouts:
            path = directory / layout_file_name(layout)
            self.save(layout, path)
            paths.append(path)
        return paths
