from __future__ import annotations

from pathlib import Path

from adapters.filesystem.json_utils import load_json, write_json_locked
from domain.models import RuleDocument
from domain.ports.repositories import RuleDocumentRepository
from domain.services.legacy_positions import upgrade_rule_document_payload


class FileSystemRuleDocumentRepository(RuleDocumentRepository):
    def load(self, path: Path) -> RuleDocument:
        if not path.exists():
            msg = f"Layout rules file not found: {path}"
            raise FileNotFoundError(msg)
        payload = upgrade_rule_document_payload(load_json(path))
        return RuleDocument.model_validate(payload)

    def save(self, document: RuleDocument, path: Path) -> None:
        write_json_locked(path, document.to_dict())
