"""One graph build per user action, against a shared frequency store.

`GraphSession` owns the process-wide FrequencyStore and a generation counter.
Every `build` takes the next generation; when a newer build has started by
the time the fetches complete, the older result is discarded (StaleBuildError)
before it can touch the frequency store.
"""
from __future__ import annotations
import asyncio
import logging
import xml.etree.ElementTree as ET
from typing import Any, Callable, Dict, List, Mapping, Optional

from . import config
from .build_graph import PathwayGraph, build_pathway_graph
from .errors import PathwayFetchError, StaleBuildError
from .fetch import fetch_sources, normalize_pathway_id
from .frequency import FrequencyStore
from .gpml import CollapseResult, collapse_groups, parse_gpml
from .schema import rows_from_bindings

logger = logging.getLogger(__name__)


def diagram_rows(gpml_text: str, pathway_id: str, revision=None) -> CollapseResult:
    try:
        doc = parse_gpml(gpml_text)
    except ET.ParseError as e:
        raise PathwayFetchError('gpml', pathway_id, f'invalid GPML: {e}') from e
    return collapse_groups(doc, pathway_id, revision)


class GraphSession:
    def __init__(
        self,
        store: Optional[FrequencyStore] = None,
        sparql_fetcher: Optional[Callable[[str], List[Dict[str, Any]]]] = None,
        gpml_fetcher: Optional[Callable[[str], str]] = None,
        custom_edges: Optional[Mapping[str, list]] = None,
        min_overlap: Optional[int] = None,
    ):
        self.store = store if store is not None else FrequencyStore()
        self.sparql_fetcher = sparql_fetcher
        self.gpml_fetcher = gpml_fetcher
        self.custom_edges = config.CUSTOM_EDGES if custom_edges is None else custom_edges
        self.min_overlap = min_overlap
        self.generation = 0

    def next_generation(self) -> int:
        self.generation += 1
        return self.generation

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def reset(self) -> None:
        self.store.reset()

    async def build(self, pathway_id: str, iri_map: Optional[Mapping[str, str]] = None) -> PathwayGraph:
        """Fetch both sources, merge them and build the canonical graph.

        Raises ValueError for a malformed pathway id, PathwayFetchError when
        either source fails, StaleBuildError when superseded by a newer build.
        """
        pid = normalize_pathway_id(pathway_id)
        generation = self.next_generation()
        bindings, gpml_text = await fetch_sources(pid, self.sparql_fetcher, self.gpml_fetcher)
        rows = rows_from_bindings(bindings)
        collapsed = diagram_rows(gpml_text, pid)
        # no awaits from here on: the check and the store update run atomically on the loop
        if not self.is_current(generation):
            logger.info('discarding stale build %d for %s (current %d)', generation, pid, self.generation)
            raise StaleBuildError(pid, generation, self.generation)
        graph = build_pathway_graph(
            rows + collapsed.rows,
            pid,
            store=self.store,
            iri_map=iri_map,
            custom_edges=self.custom_edges.get(pid),
            min_overlap=self.min_overlap,
        )
        graph.stats['query_rows'] = len(rows)
        graph.stats['diagram_rows'] = len(collapsed.rows)
        graph.stats['skipped_interactions'] = collapsed.skipped
        graph.stats['incomplete_interactions'] = collapsed.incomplete
        graph.stats['groups'] = len(collapsed.groups)
        graph.stats['generation'] = generation
        return graph

    def build_sync(self, pathway_id: str, iri_map: Optional[Mapping[str, str]] = None) -> PathwayGraph:
        return asyncio.run(self.build(pathway_id, iri_map))


__all__ = ['GraphSession', 'diagram_rows']
