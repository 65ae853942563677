"""Canonical graph records and the node registry.

The registry merges surface forms of the same entity ('PIP', 'PIP3',
'pip-3') into one node keyed by a canonical core. Keys are kept in
first-seen order so fuzzy resolution is reproducible.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from . import normalization as norm


@dataclass
class CanonicalNode:
    id: str
    label: str
    member_ids: Optional[List[str]] = None  # supernodes only

    def as_dict(self) -> dict:
        out = {'id': self.id, 'label': self.label}
        if self.member_ids is not None:
            out['memberIds'] = list(self.member_ids)
        return out


@dataclass
class DirectedEdge:
    source_id: str
    target_id: str
    label: str = ''
    type: str = ''

    @property
    def key(self):
        return (self.source_id, self.target_id)

    def as_dict(self) -> dict:
        return {'source': self.source_id, 'target': self.target_id, 'label': self.label, 'type': self.type}


@dataclass
class TableRow:
    source: str
    target: str
    url: str
    source_id: str
    target_id: str

    def as_dict(self) -> dict:
        return {
            'source': self.source,
            'target': self.target,
            'url': self.url,
            'sourceId': self.source_id,
            'targetId': self.target_id,
        }


@dataclass
class NodeRegistry:
    """Get-or-create store of canonical nodes for one build."""
    min_overlap: Optional[int] = None
    aliases: Optional[Dict[str, str]] = None
    nodes: Dict[str, CanonicalNode] = field(default_factory=dict)

    def keys(self) -> List[str]:
        return list(self.nodes.keys())

    def core(self, label: str) -> str:
        return norm.normalize_label(label, self.aliases)

    def resolve(self, label: str) -> str:
        return norm.resolve_key(self.core(label), self.nodes.keys(), self.min_overlap)

    def get_or_create(self, label: str) -> Optional[CanonicalNode]:
        """Return the node for `label`, arbitrating its display label.

        Labels that normalize to an empty core have no node (None).
        """
        core = norm.normalize_label(label, self.aliases)
        if not core:
            return None
        key = norm.resolve_key(core, self.nodes.keys(), self.min_overlap)
        node = self.nodes.get(key)
        if node is None:
            node = CanonicalNode(id=key, label=label)
            self.nodes[key] = node
        else:
            node.label = norm.choose_better_label(node.label, label, key)
        return node

    def add_supernode(self, label: str, member_ids: List[str]) -> Optional[CanonicalNode]:
        node = self.get_or_create(label)
        if node is not None and node.member_ids is None:
            node.member_ids = list(member_ids)
        return node

    def __len__(self):
        return len(self.nodes)

    def __contains__(self, key):
        return key in self.nodes

    def values(self) -> List[CanonicalNode]:
        return list(self.nodes.values())


__all__ = ['CanonicalNode', 'DirectedEdge', 'TableRow', 'NodeRegistry']
