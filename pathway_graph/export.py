"""Export built graphs to JSON and import-friendly CSV.

Creates, inside the output directory:
- <pathway>.graph.json  (PathwayGraph.as_dict)
- nodes.csv             (id:ID,label,layer:int,pathway,members)
- relations.csv         (:START_ID,:END_ID,type,label,pathway)
- frequency.csv         (gene,count:int,pathways)
"""
from __future__ import annotations
import csv
import json
from pathlib import Path
from typing import Any, Iterable

from .build_graph import PathwayGraph
from .frequency import FrequencyStore

NODE_HEADERS = ['id:ID', 'label', 'layer:int', 'pathway', 'members']
REL_HEADERS = [':START_ID', ':END_ID', 'type', 'label', 'pathway']
FREQ_HEADERS = ['gene', 'count:int', 'pathways']


def save_json(obj: Any, path: Path):
    path.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding='utf-8')


def save_graph_json(graph: PathwayGraph, out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / f'{graph.pathway_id}.graph.json'
    save_json(graph.as_dict(), path)
    return path


def export_csv(graphs: Iterable[PathwayGraph], store: FrequencyStore, out_dir: Path):
    out_dir.mkdir(parents=True, exist_ok=True)
    graphs = list(graphs)
    with (out_dir / 'nodes.csv').open('w', newline='', encoding='utf-8') as nf:
        w = csv.writer(nf)
        w.writerow(NODE_HEADERS)
        for g in graphs:
            for n in g.nodes:
                w.writerow([n.id, n.label, g.layers.get(n.id, 0), g.pathway_id, '|'.join(n.member_ids or [])])
    with (out_dir / 'relations.csv').open('w', newline='', encoding='utf-8') as rf:
        w = csv.writer(rf)
        w.writerow(REL_HEADERS)
        for g in graphs:
            for e in g.links:
                w.writerow([e.source_id, e.target_id, e.type, e.label, g.pathway_id])
    with (out_dir / 'frequency.csv').open('w', newline='', encoding='utf-8') as ff:
        w = csv.writer(ff)
        w.writerow(FREQ_HEADERS)
        for node_id, rec in store.records.items():
            w.writerow([node_id, rec.count, '|'.join(sorted(rec.pathways_seen))])


__all__ = ['save_json', 'save_graph_json', 'export_csv']
