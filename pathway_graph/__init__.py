"""Canonical pathway graphs from WikiPathways SPARQL rows and GPML diagrams.

Convenience exports:
 - `build_pathway_graph` rows -> PathwayGraph (nodes, links, tableRows, layers)
 - `GraphSession` fetch + build per pathway against a shared FrequencyStore
 - `assign_layers` cycle-tolerant layering for hierarchical layout

CLI: `python -m pathway_graph.run --pathway WP17`
"""

from .build_graph import PathwayGraph, build_pathway_graph  # noqa: F401
from .frequency import FrequencyStore  # noqa: F401
from .layering import assign_layers  # noqa: F401
from .pipeline import GraphSession  # noqa: F401
