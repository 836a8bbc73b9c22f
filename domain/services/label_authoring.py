from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Dict, List

from domain.errors import DuplicateLabelError, LabelNotFoundError


def add_label(labels: Sequence[str], label: str) -> List[str]:
    cleaned = _clean_label(label)
    if cleaned in labels:
        msg = f'Label "{cleaned}" already exists'
        raise DuplicateLabelError(msg)
    return [*labels, cleaned]


def rename_label(labels: Sequence[str], old_label: str, new_label: str) -> List[str]:
    _require_label(labels, old_label)
    cleaned = _clean_label(new_label)
    if cleaned != old_label and cleaned in labels:
        msg = f'Label "{cleaned}" already exists'
        raise DuplicateLabelError(msg)
    return [cleaned if label == old_label else label for label in labels]


def remove_label(labels: Sequence[str], label: str) -> List[str]:
    _require_label(labels, label)
    return [existing for existing in labels if existing != label]


def rename_assignments(
    label_map: Mapping[str, str],
    old_label: str,
    new_label: str,
) -> Dict[str, str]:
    return {
        element_id: new_label if role == old_label else role
        for element_id, role in label_map.items()
    }


def assign_role(
    label_map: Mapping[str, str],
    element_id: str,
    role: str,
    labels: Sequence[str],
) -> Dict[str, str]:
    element_id = str(element_id or "").strip()
    if not element_id:
        msg = "Element id must not be empty"
        raise ValueError(msg)
    _require_label(labels, role)
    return {**label_map, element_id: role}


def unassign_role(label_map: Mapping[str, str], element_id: str) -> Dict[str, str]:
    if element_id not in label_map:
        msg = f'Element "{element_id}" has no assigned role'
        raise LabelNotFoundError(msg)
    return {key: value for key, value in label_map.items() if key != element_id}


def _clean_label(label: str) -> str:
    cleaned = str(label or "").strip()
    if not cleaned:
        msg = "Label must not be empty"
        raise ValueError(msg)
    return cleaned


def _require_label(labels: Sequence[str], label: str) -> None:
    if label not in labels:
        msg = f'Label "{label}" not found'
        raise LabelNotFoundError(msg)
