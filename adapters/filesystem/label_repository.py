from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path

from adapters.filesystem.json_utils import load_json, write_json_locked
from domain.models import DEFAULT_LABELS
from domain.ports.repositories import LabelMapRepository, LabelVocabularyRepository


class FileSystemLabelMapRepository(LabelMapRepository):
    def load(self, path: Path) -> dict[str, str]:
        if not path.exists():
            return {}
        payload = load_json(path)
        labels = payload.get("labels", payload)
        if not isinstance(labels, dict):
            return {}
        return {str(key): str(value) for key, value in labels.items() if value}

    def save(self, labels: Mapping[str, str], path: Path) -> None:
        write_json_locked(path, {str(key): str(value) for key, value in labels.items()})


class FileSystemLabelVocabularyRepository(LabelVocabularyRepository):
    def __init__(self, default_labels: Sequence[str] = DEFAULT_LABELS) -> None:
        self.default_labels = list(default_labels)

    def load(self, path: Path) -> list[str]:
        if not path.exists():
            self.save(self.default_labels, path)
            return list(self.default_labels)
        labels = load_json(path).get("labels")
        if not isinstance(labels, list):
            return []
        return list(dict.fromkeys(str(label) for label in labels if label))

    def save(self, labels: Sequence[str], path: Path) -> None:
        write_json_locked(path, {"labels": list(labels)})
