from __future__ import annotations
"""Boundary record for interaction rows.

Both sources are converted into `QueryRow` before they reach the core:
SPARQL result bindings through `QueryRow.from_binding`, collapsed GPML
interactions through `gpml.collapse_groups`. Only the endpoint URIs and
labels matter for graph building; every other field is optional.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

# SPARQL variable name -> field name
BINDING_FIELDS = {
    'source': 'source',
    'sourceLabel': 'source_label',
    'target': 'target',
    'targetLabel': 'target_label',
    'interaction': 'interaction',
    'interactionLabel': 'interaction_label',
    'interactionType': 'interaction_type',
    'sourceType': 'source_type',
    'targetType': 'target_type',
    'pathwayTitle': 'pathway_title',
}


class QueryRow(BaseModel):
    source: Optional[str] = None
    source_label: Optional[str] = None
    target: Optional[str] = None
    target_label: Optional[str] = None
    interaction: Optional[str] = None
    interaction_label: Optional[str] = None
    interaction_type: Optional[str] = None
    source_type: Optional[str] = None
    target_type: Optional[str] = None
    pathway_title: Optional[str] = None
    # member GraphIds when an endpoint is a collapsed group
    source_members: Optional[List[str]] = None
    target_members: Optional[List[str]] = None

    @classmethod
    def from_binding(cls, binding: Dict[str, Any]) -> 'QueryRow':
        """Build a row from one SPARQL JSON binding ({var: {'type', 'value'}}).

        Unknown variables are ignored; malformed cells count as absent.
        """
        values: Dict[str, Optional[str]] = {}
        for var, field in BINDING_FIELDS.items():
            cell = binding.get(var)
            if isinstance(cell, dict) and cell.get('value') is not None:
                values[field] = str(cell['value'])
        return cls(**values)

    def has_uris(self) -> bool:
        return bool(self.source) and bool(self.target)

    def has_labels(self) -> bool:
        return bool(self.source_label) and bool(self.target_label)


def rows_from_bindings(bindings) -> list:
    return [QueryRow.from_binding(b) for b in bindings or [] if isinstance(b, dict)]


__all__ = ['QueryRow', 'BINDING_FIELDS', 'rows_from_bindings']
