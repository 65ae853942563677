"""Layer assignment for hierarchical layout.

Longest-path style ranking over a Kahn traversal. Cycles are tolerated: when
no node has zero indegree every node seeds the queue, and nodes the traversal
never reaches are placed one layer below their deepest predecessor. Edges may
point "backward" across layers under cycles; the result is an approximation
meant for drawing, not a topological order.
"""
from __future__ import annotations
from collections import defaultdict, deque
from typing import Dict, Iterable, List, Tuple


def _edge_pairs(edges) -> List[Tuple[str, str]]:
    pairs = []
    for e in edges:
        if isinstance(e, tuple):
            pairs.append(e)
        else:
            pairs.append((e.source_id, e.target_id))
    return pairs


def assign_layers(node_ids: Iterable[str], edges) -> Dict[str, int]:
    """Return node id -> layer (>= 0) for every node in `node_ids`.

    `edges` holds (source, target) tuples or DirectedEdge records; self-loops
    and edges touching unknown ids are ignored.
    """
    nodes = list(dict.fromkeys(node_ids))
    known = set(nodes)
    out_edges: Dict[str, List[str]] = defaultdict(list)
    in_edges: Dict[str, List[str]] = defaultdict(list)
    indegree: Dict[str, int] = {n: 0 for n in nodes}
    for src, tgt in _edge_pairs(edges):
        if src == tgt or src not in known or tgt not in known:
            continue
        out_edges[src].append(tgt)
        in_edges[tgt].append(src)
        indegree[tgt] += 1

    layer: Dict[str, int] = {n: 0 for n in nodes}
    remaining = dict(indegree)
    seeds = [n for n in nodes if indegree[n] == 0] or nodes
    visited = set(seeds)
    dq = deque(seeds)
    while dq:
        cur = dq.popleft()
        for tgt in out_edges.get(cur, []):
            # a queued node's layer is final
            if tgt in visited:
                continue
            layer[tgt] = max(layer[tgt], layer[cur] + 1)
            remaining[tgt] -= 1
            if remaining[tgt] <= 0:
                visited.add(tgt)
                dq.append(tgt)

    for n in nodes:
        if n in visited:
            continue
        preds = in_edges.get(n, [])
        layer[n] = max((layer[p] for p in preds), default=-1) + 1
    return layer


def layer_count(layers: Dict[str, int]) -> int:
    return (max(layers.values()) + 1) if layers else 0


__all__ = ['assign_layers', 'layer_count']
