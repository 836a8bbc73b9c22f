from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Dict, List, Optional

from domain.models import Bounds, SourceElement


class ElementIndex:
    def __init__(self, tree: Sequence[SourceElement]) -> None:
        self._nodes: Dict[str, SourceElement] = {}
        self._parents: Dict[str, Optional[str]] = {}
        # Roots keep their own back-reference so detached subtrees still report a parent.
        for root in tree:
            self._register(root, root.parent)

    def _register(self, element: SourceElement, parent_id: Optional[str]) -> None:
        self._nodes[element.id] = element
        self._parents[element.id] = parent_id
        for child in element.children:
            self._register(child, element.id)

    def __contains__(self, element_id: object) -> bool:
        return element_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def get(self, element_id: str) -> Optional[SourceElement]:
        return self._nodes.get(element_id)

    def parent_id(self, element_id: str) -> Optional[str]:
        return self._parents.get(element_id)

    def ancestors(self, element_id: str) -> Iterator[SourceElement]:
        parent_id = self._parents.get(element_id)
        while parent_id is not None:
            parent = self._nodes.get(parent_id)
            if parent is None:
                return
            yield parent
            parent_id = self._parents.get(parent_id)

    def is_visible(
        self,
        element: SourceElement,
        overrides: Mapping[str, bool] | None = None,
    ) -> bool:
        overrides = overrides or {}
        if not overrides.get(element.id, element.visible):
            return False
        return all(
            overrides.get(ancestor.id, ancestor.visible) for ancestor in self.ancestors(element.id)
        )


def iter_elements(tree: Iterable[SourceElement]) -> Iterator[SourceElement]:
    for element in tree:
        yield element
        yield from iter_elements(element.children)


def derive_group_bounds(tree: Sequence[SourceElement]) -> List[SourceElement]:
    return [_with_group_bounds(element) for element in tree]


def _with_group_bounds(element: SourceElement) -> SourceElement:
    if not element.children:
        return element
    children = [_with_group_bounds(child) for child in element.children]
    bounds = element.bounds
    if bounds is None:
        bounds = union_bounds(child.bounds for child in children)
    return element.model_copy(update={"children": children, "bounds": bounds})


def union_bounds(bounds: Iterable[Optional[Bounds]]) -> Optional[Bounds]:
    result: Optional[Bounds] = None
    for item in bounds:
        if item is None:
            continue
        result = item if result is None else result.union(item)
    return result
