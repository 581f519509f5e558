"""Binary stellar hierarchy.

A system with N stars is a binary tree with the stars as its N leaves and
N - 1 barycenters as internal nodes. Each barycenter owns exactly two
children; nothing points back up the tree, so parent lookups walk down from
the root.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Union


class GenerationError(RuntimeError):
    """A system could not be generated at all."""


@dataclass(frozen=True)
class StarNode:
    id: str
    star_id: str

    is_barycenter = False

    def children(self) -> tuple:
        return ()


@dataclass(frozen=True)
class BarycenterNode:
    id: str
    primary: "HierarchyNode"
    secondary: "HierarchyNode"
    separation_au: float
    eccentricity: float
    period_yr: float

    is_barycenter = True

    def children(self) -> tuple:
        return (self.primary, self.secondary)


HierarchyNode = Union[StarNode, BarycenterNode]


def _walk(node: HierarchyNode) -> Iterator[HierarchyNode]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children()))


class StellarHierarchy:
    """Read-only view over the root of a stellar hierarchy."""

    def __init__(self, root: HierarchyNode) -> None:
        self.root = root
        self._index: Dict[str, HierarchyNode] = {}
        for node in _walk(root):
            if node.id in self._index:
                raise GenerationError(f"Duplicate hierarchy node id {node.id!r}")
            self._index[node.id] = node
        self.validate()

    def __len__(self) -> int:
        return len(self._index)

    def __iter__(self) -> Iterator[HierarchyNode]:
        return iter(self.flatten())

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({len(self.leaf_ids())} stars, "
            f"{len(self.barycenters())} barycenters, depth {self.depth()})"
        )

    def validate(self) -> None:
        leaves = self.leaf_ids()
        if not leaves:
            raise GenerationError("Stellar hierarchy has no stars")
        if len(self.barycenters()) != len(leaves) - 1:
            raise GenerationError(
                f"Hierarchy with {len(leaves)} stars has "
                f"{len(self.barycenters())} barycenters"
            )

    def find(self, node_id: str) -> Optional[HierarchyNode]:
        return self._index.get(node_id)

    def parent_of(self, node_id: str) -> Optional[BarycenterNode]:
        for node in _walk(self.root):
            if node.is_barycenter and node_id in (node.primary.id, node.secondary.id):
                return node
        return None

    def sibling_of(self, node_id: str) -> Optional[HierarchyNode]:
        parent = self.parent_of(node_id)
        if parent is None:
            return None
        return parent.secondary if parent.primary.id == node_id else parent.primary

    def flatten(self) -> List[HierarchyNode]:
        """Every node, pre-order, primary before secondary."""
        return list(_walk(self.root))

    def leaf_ids(self, node: Optional[HierarchyNode] = None) -> List[str]:
        """Star ids under ``node`` (default the root), left to right."""
        return [n.star_id for n in _walk(node or self.root) if not n.is_barycenter]

    def barycenters(self) -> List[BarycenterNode]:
        return [n for n in _walk(self.root) if n.is_barycenter]

    def depth(self, node: Optional[HierarchyNode] = None) -> int:
        """Edges on the longest root-to-leaf path, 0 for a single star."""
        node = node or self.root
        if not node.is_barycenter:
            return 0
        return 1 + max(self.depth(node.primary), self.depth(node.secondary))

    def to_dict(self, node: Optional[HierarchyNode] = None) -> dict:
        node = node or self.root
        if not node.is_barycenter:
            return {"type": "star", "id": node.id, "star_id": node.star_id}
        return {
            "type": "barycenter",
            "id": node.id,
            "separation_au": node.separation_au,
            "eccentricity": node.eccentricity,
            "period_yr": node.period_yr,
            "children": [self.to_dict(node.primary), self.to_dict(node.secondary)],
        }
