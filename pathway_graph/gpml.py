"""GPML (WikiPathways diagram) -> interaction rows, with group collapsing.

Nodes that share a GroupRef are folded into one supernode; interactions that
point at a grouped member are redirected to the group before any label
canonicalization happens, so an edge never ends on an individual member once
a group exists for it.

Expected input elements (namespace prefixes are ignored):
  <DataNode GraphId TextLabel Type GroupRef><Xref Database ID/></DataNode>
  <Group GroupId GraphId/>
  <Interaction GraphId><Graphics><Point GraphRef ArrowHead/>...</Graphics></Interaction>
"""
from __future__ import annotations
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple, Union

from . import config
from .schema import QueryRow

logger = logging.getLogger(__name__)

GPML_CFG = config.CONFIG['gpml']
CANON_CFG = config.CONFIG['canonical']


@dataclass
class DiagramNode:
    id: str
    label: str
    type: str = 'DataNode'
    group_ref: Optional[str] = None
    uri: Optional[str] = None


@dataclass
class GroupRecord:
    id: str
    member_ids: List[str] = field(default_factory=list)
    member_labels: List[str] = field(default_factory=list)
    member_uris: List[Optional[str]] = field(default_factory=list)
    type: str = 'Group'

    @property
    def label(self) -> str:
        return CANON_CFG['group_label_joiner'].join(self.member_labels)

    @property
    def uri(self) -> Optional[str]:
        uris = [u for u in self.member_uris if u]
        if not uris:
            return None
        return CANON_CFG['group_uri_joiner'].join(uris)


@dataclass
class DiagramInteraction:
    id: str
    point_refs: List[Optional[str]] = field(default_factory=list)
    arrow_heads: List[Optional[str]] = field(default_factory=list)


@dataclass
class DiagramDocument:
    title: Optional[str]
    nodes: Dict[str, DiagramNode]
    group_declarations: List[Tuple[Optional[str], Optional[str]]]  # (GroupId, GraphId)
    interactions: List[DiagramInteraction]


@dataclass
class CollapseResult:
    rows: List[QueryRow]
    groups: Dict[str, GroupRecord]
    endpoints: List[Tuple[str, str]]  # resolved (source ref, target ref) per kept row
    skipped: int = 0      # unresolved endpoint reference
    incomplete: int = 0   # fewer than two point references


def _local(tag: str) -> str:
    return tag.rsplit('}', 1)[-1].split(':')[-1]


def _iter_local(root: ET.Element, name: str):
    for el in root.iter():
        if isinstance(el.tag, str) and _local(el.tag) == name:
            yield el


def _attr(el: ET.Element, *names: str) -> Optional[str]:
    for n in names:
        v = el.get(n)
        if v:
            return v
    return None


def xref_uri(database: Optional[str], entry: Optional[str]) -> Optional[str]:
    db = (database or '').strip().lower()
    entry = (entry or '').strip()
    if not db or not entry:
        return None
    return GPML_CFG['xref_uri'].format(db=db, entry=entry)


def parse_gpml(source: Union[str, bytes, ET.Element]) -> DiagramDocument:
    """Parse GPML text into a DiagramDocument. Raises ET.ParseError on bad XML."""
    root = source if isinstance(source, ET.Element) else ET.fromstring(source)
    nodes: Dict[str, DiagramNode] = {}
    auto = 0
    for el in _iter_local(root, 'DataNode'):
        node_id = _attr(el, 'GraphId', 'elementId')
        if not node_id:
            node_id = f'auto_{auto}'
            auto += 1
        uri = None
        xref = next(_iter_local(el, 'Xref'), None)
        if xref is not None:
            uri = xref_uri(_attr(xref, 'Database', 'dataSource'), _attr(xref, 'ID', 'identifier'))
        nodes[node_id] = DiagramNode(
            id=node_id,
            label=el.get('TextLabel') or node_id,
            type=el.get('Type') or 'DataNode',
            group_ref=_attr(el, 'GroupRef', 'groupRef'),
            uri=uri,
        )
    declarations = [(el.get('GroupId'), _attr(el, 'GraphId', 'elementId')) for el in _iter_local(root, 'Group')]
    interactions: List[DiagramInteraction] = []
    for i, el in enumerate(_iter_local(root, 'Interaction')):
        inter = DiagramInteraction(id=_attr(el, 'GraphId', 'elementId') or f'interaction_{i}')
        for pt in _iter_local(el, 'Point'):
            inter.point_refs.append(_attr(pt, 'GraphRef', 'elementRef'))
            inter.arrow_heads.append(_attr(pt, 'ArrowHead', 'arrowHead'))
        interactions.append(inter)
    title = root.get('Name') if _local(root.tag) == 'Pathway' else None
    return DiagramDocument(title=title, nodes=nodes, group_declarations=declarations, interactions=interactions)


def build_groups(doc: DiagramDocument) -> Dict[str, GroupRecord]:
    """Bucket grouped nodes by GroupRef, then rename buckets to their graph-level id."""
    groups: Dict[str, GroupRecord] = {}
    for node in doc.nodes.values():
        if not node.group_ref:
            continue
        g = groups.get(node.group_ref)
        if g is None:
            g = GroupRecord(id=node.group_ref)
            groups[node.group_ref] = g
        g.member_ids.append(node.id)
        g.member_labels.append(node.label)
        g.member_uris.append(node.uri)
    for group_id, graph_id in doc.group_declarations:
        g = groups.get(group_id) if group_id else None
        if g is not None and graph_id and graph_id != group_id:
            g.id = graph_id
    return groups


def _endpoint_fields(prefix: str, item: Union[DiagramNode, GroupRecord]) -> dict:
    fields = {
        prefix: item.uri or item.id,
        f'{prefix}_label': item.label,
        f'{prefix}_type': item.type,
    }
    if isinstance(item, GroupRecord):
        fields[f'{prefix}_members'] = list(item.member_ids)
    return fields


def collapse_groups(doc: DiagramDocument, pathway_id: str, revision=None) -> CollapseResult:
    """Turn diagram interactions into QueryRows with grouped endpoints collapsed."""
    revision = GPML_CFG['revision'] if revision is None else revision
    groups = build_groups(doc)
    by_final_id = {g.id: g for g in groups.values()}
    result = CollapseResult(rows=[], groups=groups, endpoints=[])

    def redirect(ref: str) -> str:
        node = doc.nodes.get(ref)
        if node is not None and node.group_ref and node.group_ref in groups:
            return groups[node.group_ref].id
        return ref

    def resolve(ref: str):
        # group ids win over nodes: a redirected ref always names a group
        if ref in by_final_id:
            return by_final_id[ref]
        if ref in doc.nodes:
            return doc.nodes[ref]
        return groups.get(ref)

    for inter in doc.interactions:
        refs = [r for r in inter.point_refs if r]
        if len(refs) < 2:
            result.incomplete += 1
            continue
        source_ref, target_ref = redirect(refs[0]), redirect(refs[1])
        source, target = resolve(source_ref), resolve(target_ref)
        if source is None or target is None:
            result.skipped += 1
            logger.debug('skip interaction %s: unresolved %s -> %s', inter.id, refs[0], refs[1])
            continue
        heads = [h for h in inter.arrow_heads if h]
        row = QueryRow(
            interaction=GPML_CFG['interaction_uri'].format(
                pathway_id=pathway_id, revision=revision, interaction_id=inter.id),
            interaction_type=heads[-1] if heads else None,
            pathway_title=doc.title,
            **_endpoint_fields('source', source),
            **_endpoint_fields('target', target),
        )
        result.rows.append(row)
        result.endpoints.append((source.id, target.id))
    if result.skipped or result.incomplete:
        logger.info('%s: skipped %d unresolved and %d incomplete diagram interactions',
                    pathway_id, result.skipped, result.incomplete)
    return result


__all__ = [
    'DiagramNode', 'GroupRecord', 'DiagramInteraction', 'DiagramDocument', 'CollapseResult',
    'xref_uri', 'parse_gpml', 'build_groups', 'collapse_groups'
]
