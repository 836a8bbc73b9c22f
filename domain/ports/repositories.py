from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Protocol

from domain.models import GeneratedLayout, RuleDocument, SourceElement


class RuleDocumentRepository(Protocol):
    def load(self, path: Path) -> RuleDocument: ...

    def save(self, document: RuleDocument, path: Path) -> None: ...


class LabelMapRepository(Protocol):
    def load(self, path: Path) -> dict[str, str]: ...

    def save(self, labels: Mapping[str, str], path: Path) -> None: ...


class LabelVocabularyRepository(Protocol):
    def load(self, path: Path) -> list[str]: ...

    def save(self, labels: Sequence[str], path: Path) -> None: ...


class ElementTreeRepository(Protocol):
    def load(self, path: Path) -> list[SourceElement]: ...


class GeneratedLayoutRepository(Protocol):
    def save(self, layout: GeneratedLayout, path: Path) -> None: ...

    def save_all(self, layouts: Sequence[GeneratedLayout], directory: Path) -> list[Path]: ...
