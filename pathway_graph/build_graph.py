"""Build the canonical pathway graph from interaction rows.

Pipeline:
1. URI-level dedup of the raw rows (dedup.remove_duplicate_interactions)
2. Both endpoints of every row resolved through the NodeRegistry
3. Unique (source, target) edges + display table rows (EdgeBuilder)
4. Optional curated edges for the pathway
5. Frequency store updated, pathway marked loaded
6. Layer assignment for the renderer
"""
from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from . import config
from .dedup import remove_duplicate_interactions
from .entities import CanonicalNode, DirectedEdge, NodeRegistry, TableRow
from .frequency import FrequencyStore
from .layering import assign_layers, layer_count
from .schema import QueryRow

logger = logging.getLogger(__name__)

CUSTOM_EDGE_LABEL = 'custom'


def label_iri_map(rows: Iterable[QueryRow]) -> Dict[str, str]:
    """Raw label -> URI for both endpoints; later rows overwrite earlier ones."""
    iri: Dict[str, str] = {}
    for r in rows:
        if r.source_label and r.source:
            iri[r.source_label] = r.source
        if r.target_label and r.target:
            iri[r.target_label] = r.target
    return iri


class EdgeBuilder:
    """Unique directed edges plus their table rows, for one build."""

    def __init__(self, registry: NodeRegistry, iri_map: Optional[Mapping[str, str]] = None):
        self.registry = registry
        self.iri_map = iri_map or {}
        self.edges: Dict[Tuple[str, str], DirectedEdge] = {}
        self.table_rows: List[TableRow] = []
        self.duplicates = 0
        self.dropped_rows = 0

    def url_for(self, label: str) -> str:
        return self.iri_map.get(label) or config.MISSING_URL

    def add_edge(self, source: CanonicalNode, target: CanonicalNode, label: str = '', type: str = '') -> bool:
        key = (source.id, target.id)
        if key in self.edges:
            # first occurrence wins, metadata of later duplicates is not merged
            self.duplicates += 1
            logger.debug('skip duplicate edge %s -> %s', *key)
            return False
        self.edges[key] = DirectedEdge(source_id=source.id, target_id=target.id, label=label or '', type=type or '')
        self.table_rows.append(TableRow(
            source=source.label,
            target=target.label,
            url=self.url_for(source.label),
            source_id=source.id,
            target_id=target.id,
        ))
        return True

    def add_row(self, row: QueryRow) -> bool:
        if not row.has_labels():
            self.dropped_rows += 1
            logger.debug('drop unlabeled row %s -> %s', row.source, row.target)
            return False
        if not self.usable(row.source_label, row.target_label):
            self.dropped_rows += 1
            logger.debug('drop row with empty label core: %r -> %r', row.source_label, row.target_label)
            return False
        source = self._node(row.source_label, row.source_members)
        target = self._node(row.target_label, row.target_members)
        return self.add_edge(source, target, row.interaction_label, row.interaction_type)

    def usable(self, source_label: str, target_label: str) -> bool:
        """Both endpoints must have a non-empty core before either node is touched."""
        return bool(self.registry.core(source_label)) and bool(self.registry.core(target_label))

    def _node(self, label: str, members: Optional[List[str]]):
        if members:
            return self.registry.add_supernode(label, members)
        return self.registry.get_or_create(label)

    def table(self) -> List[TableRow]:
        """Edge rows followed by one placeholder row per node without outgoing edges."""
        rows = list(self.table_rows)
        has_source = {r.source_id for r in rows}
        for node in self.registry.values():
            if node.id in has_source:
                continue
            rows.append(TableRow(
                source=node.label,
                target=config.NO_OUTGOING,
                url=self.url_for(node.label),
                source_id=node.id,
                target_id='',
            ))
        return rows


@dataclass
class PathwayGraph:
    pathway_id: str
    title: Optional[str]
    nodes: List[CanonicalNode]
    links: List[DirectedEdge]
    table_rows: List[TableRow]
    layers: Dict[str, int] = field(default_factory=dict)
    stats: Dict[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        nodes = []
        for n in self.nodes:
            d = n.as_dict()
            d['layer'] = self.layers.get(n.id, 0)
            nodes.append(d)
        return {
            'pathway_id': self.pathway_id,
            'title': self.title,
            'nodes': nodes,
            'links': [e.as_dict() for e in self.links],
            'tableRows': [r.as_dict() for r in self.table_rows],
            'stats': self.stats,
        }


def add_custom_edges(builder: EdgeBuilder, pairs: Sequence[Tuple[str, str]]) -> int:
    """Append curated (source label, target label) interactions; returns how many were new."""
    added = 0
    for src_label, tgt_label in pairs:
        if not builder.usable(src_label, tgt_label):
            continue
        source = builder.registry.get_or_create(src_label)
        target = builder.registry.get_or_create(tgt_label)
        if builder.add_edge(source, target, CUSTOM_EDGE_LABEL, CUSTOM_EDGE_LABEL):
            added += 1
    return added


def _title(rows: Sequence[QueryRow]) -> Optional[str]:
    for r in rows:
        if r.pathway_title:
            return r.pathway_title
    return None


def build_pathway_graph(
    rows: Sequence[QueryRow],
    pathway_id: str,
    store: Optional[FrequencyStore] = None,
    iri_map: Optional[Mapping[str, str]] = None,
    custom_edges: Optional[Sequence[Tuple[str, str]]] = None,
    min_overlap: Optional[int] = None,
    title: Optional[str] = None,
) -> PathwayGraph:
    """Build one pathway's graph. `rows` are raw (not yet deduplicated).

    When `store` is given, every node is recorded for `pathway_id` and the
    pathway is marked loaded afterwards, so rebuilding it never changes counts.
    """
    rows = list(rows)
    deduped = remove_duplicate_interactions(rows)
    registry = NodeRegistry(min_overlap=min_overlap)
    builder = EdgeBuilder(registry, label_iri_map(rows) if iri_map is None else iri_map)
    for row in deduped:
        builder.add_row(row)
    custom_added = add_custom_edges(builder, custom_edges) if custom_edges else 0

    nodes = registry.values()
    if store is not None:
        store.record_many((n.id for n in nodes), pathway_id)
        store.mark_loaded(pathway_id)

    links = list(builder.edges.values())
    layers = assign_layers([n.id for n in nodes], links)
    table_rows = builder.table()
    connected = {e.source_id for e in links} | {e.target_id for e in links}
    stats = {
        'raw_rows': len(rows),
        'unique_rows': len(deduped),
        'dropped_rows': (len(rows) - sum(1 for r in rows if r.has_uris())) + builder.dropped_rows,
        'duplicate_edges': builder.duplicates,
        'custom_edges': custom_added,
        'nodes': len(nodes),
        'links': len(links),
        'table_rows': len(table_rows),
        'isolated_nodes': sum(1 for n in nodes if n.id not in connected),
        'layers': layer_count(layers),
    }
    return PathwayGraph(
        pathway_id=pathway_id,
        title=title or _title(rows),
        nodes=nodes,
        links=links,
        table_rows=table_rows,
        layers=layers,
        stats=stats,
    )


__all__ = ['EdgeBuilder', 'PathwayGraph', 'label_iri_map', 'add_custom_edges', 'build_pathway_graph', 'CUSTOM_EDGE_LABEL']
