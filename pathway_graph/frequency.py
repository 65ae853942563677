"""Cross-pathway node frequency.

One `FrequencyStore` lives for the whole process (or test) and is passed into
every build. A node's count is the number of distinct pathways it has been
seen in, never the number of mentions: once a pathway is marked loaded,
further `record` calls for it are ignored.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set


@dataclass
class FrequencyRecord:
    node_id: str
    pathways_seen: Set[str] = field(default_factory=set)

    @property
    def count(self) -> int:
        return len(self.pathways_seen)


class FrequencyStore:
    def __init__(self):
        self.records: Dict[str, FrequencyRecord] = {}
        self.loaded_pathways: Set[str] = set()

    def is_loaded(self, pathway_id: str) -> bool:
        return pathway_id in self.loaded_pathways

    def record(self, node_id: str, pathway_id: str) -> None:
        if pathway_id in self.loaded_pathways:
            return
        rec = self.records.get(node_id)
        if rec is None:
            rec = FrequencyRecord(node_id=node_id)
            self.records[node_id] = rec
        rec.pathways_seen.add(pathway_id)

    def record_many(self, node_ids: Iterable[str], pathway_id: str) -> None:
        for node_id in node_ids:
            self.record(node_id, pathway_id)

    def mark_loaded(self, pathway_id: str) -> None:
        """Call only after the pathway's whole graph has been built."""
        self.loaded_pathways.add(pathway_id)

    def reset(self) -> None:
        self.records.clear()
        self.loaded_pathways.clear()

    def get(self, node_id: str):
        return self.records.get(node_id)

    def as_table(self) -> List[Dict[str, object]]:
        """One row per node: {'gene': id, <pathway>: 1, ...} (absent = not seen)."""
        rows = []
        for node_id, rec in self.records.items():
            row: Dict[str, object] = {'gene': node_id}
            for p in sorted(rec.pathways_seen):
                row[p] = 1
            rows.append(row)
        return rows

    def __len__(self):
        return len(self.records)


__all__ = ['FrequencyRecord', 'FrequencyStore']
