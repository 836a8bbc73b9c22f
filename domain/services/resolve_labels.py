from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Dict, List, Optional

from domain.models import SourceElement


def resolve_labeled_elements(
    tree: Sequence[SourceElement],
    label_map: Mapping[str, str],
    known_roles: Iterable[str],
) -> Dict[str, List[SourceElement]]:
    """Group source elements by their effective role.

    An element's role is its own entry in ``label_map`` or, failing that, the role of its
    nearest labeled ancestor. Groups and leaves are both collected, in pre-order. Roles
    outside ``known_roles`` are dropped.
    """
    roles = list(dict.fromkeys(known_roles))
    known = set(roles)
    buckets: Dict[str, List[SourceElement]] = {role: [] for role in roles}

    def visit(element: SourceElement, inherited: Optional[str]) -> None:
        role = label_map.get(element.id) or inherited
        if role and role in known:
            buckets[role].append(element)
        for child in element.children:
            visit(child, role)

    for root in tree:
        visit(root, None)
    return buckets
