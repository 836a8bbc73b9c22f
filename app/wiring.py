from __future__ import annotations

import logging

from adapters.filesystem.element_tree_repository import FileSystemElementTreeRepository
from adapters.filesystem.label_repository import (
    FileSystemLabelMapRepository,
    FileSystemLabelVocabularyRepository,
)
from adapters.filesystem.layout_repository import FileSystemGeneratedLayoutRepository
from adapters.filesystem.rule_repository import FileSystemRuleDocumentRepository
from adapters.layout.safezone import SafezoneGeometryEngine
from app.config import AppSettings
from domain.ports.repositories import (
    ElementTreeRepository,
    GeneratedLayoutRepository,
    LabelMapRepository,
    LabelVocabularyRepository,
    RuleDocumentRepository,
)
from domain.services.generate_layout import LayoutAssembler


def configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=settings.layout.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_layout_assembler(settings: AppSettings) -> LayoutAssembler:
    return LayoutAssembler(SafezoneGeometryEngine())


def build_rule_repository(settings: AppSettings) -> RuleDocumentRepository:
    return FileSystemRuleDocumentRepository()


def build_label_map_repository(settings: AppSettings) -> LabelMapRepository:
    return FileSystemLabelMapRepository()


def build_label_vocabulary_repository(settings: AppSettings) -> LabelVocabularyRepository:
    return FileSystemLabelVocabularyRepository(settings.layout.default_labels)


def build_element_tree_repository(settings: AppSettings) -> ElementTreeRepository:
    return FileSystemElementTreeRepository(derive_bounds=settings.layout.derive_group_bounds)


def build_layout_repository(settings: AppSettings) -> GeneratedLayoutRepository:
    return FileSystemGeneratedLayoutRepository()
