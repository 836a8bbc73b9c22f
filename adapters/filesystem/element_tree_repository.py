from __future__ import annotations

from pathlib import Path
from typing import Any

from adapters.filesystem.json_utils import load_json_value
from domain.element_tree import derive_group_bounds, iter_elements
from domain.models import SourceElement
from domain.ports.repositories import ElementTreeRepository


class FileSystemElementTreeRepository(ElementTreeRepository):
    def __init__(self, derive_bounds: bool = True) -> None:
        self.derive_bounds = derive_bounds

    def load(self, path: Path) -> list[SourceElement]:
        payload = load_json_value(path)
        roots = [SourceElement.model_validate(item) for item in self._roots(payload)]
        self._ensure_unique_ids(roots)
        if self.derive_bounds:
            return derive_group_bounds(roots)
        return roots

    def _roots(self, payload: Any) -> list[Any]:
        if isinstance(payload, list):
            return payload
        if isinstance(payload, dict):
            for key in ("layers", "elements"):
                value = payload.get(key)
                if isinstance(value, list):
                    return value
        msg = "Element tree must be a list of elements or an object with a 'layers' list"
        raise ValueError(msg)

    def _ensure_unique_ids(self, roots: list[SourceElement]) -> None:
        seen: set[str] = set()
        for element in iter_elements(roots):
            if element.id in seen:
                msg = f"Duplicate element id found: {element.id}"
                raise ValueError(msg)
            seen.add(element.id)
