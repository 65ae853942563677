from __future__ import annotations
"""Centralized configuration for pathway graph building.

Values can be overridden through environment variables (a local .env file is
loaded if python-dotenv finds one).
"""
import os

from dotenv import load_dotenv

load_dotenv()

CONFIG = {
    'sparql': {
        'endpoint': os.getenv('WIKIPATHWAYS_SPARQL_URL', 'https://sparql.wikipathways.org/sparql'),
        'accept': 'application/sparql-results+json',
    },
    'gpml': {
        # JSON wrapper around the GPML document (pathway.gpml)
        'endpoint': os.getenv('WIKIPATHWAYS_GPML_URL', 'https://webservice.wikipathways.org/getPathway'),
        'revision': 0,
        'interaction_uri': 'http://rdf.wikipathways.org/Pathway/{pathway_id}_r{revision}/WP/Interaction/{interaction_id}',
        'xref_uri': 'https://identifiers.org/{db}/{entry}',
    },
    'http': {
        'timeout': float(os.getenv('PATHWAY_GRAPH_TIMEOUT', '30')),
        'user_agent': 'pathway-graph/0.1 (+https://www.wikipathways.org)',
    },
    'canonical': {
        # Minimum shared length before two cores may be merged by prefix.
        # Observed variants used 3 and 5; 3 is the default.
        'min_overlap': int(os.getenv('PATHWAY_GRAPH_MIN_OVERLAP', '3')),
        # Whole-token replacements applied after normalization (core -> core)
        'aliases': {
            'PKB': 'AKT',
            'MAPK3': 'ERK1',
            'MAPK1': 'ERK2',
        },
        'group_label_joiner': ' / ',
        'group_uri_joiner': ' | ',
    },
    'table': {
        'missing_url': '#',
        'no_outgoing': '(no outgoing interaction)',
    },
    # Curated interactions appended after the fetched graph is built
    'custom_edges': {
        'WP17': [('PIP', 'AKT-1')],
    },
    'default_pathway': 'WP17',
}

SPARQL_ENDPOINT = CONFIG['sparql']['endpoint']
GPML_ENDPOINT = CONFIG['gpml']['endpoint']
HTTP_TIMEOUT = CONFIG['http']['timeout']
MIN_OVERLAP = CONFIG['canonical']['min_overlap']
LABEL_ALIASES = CONFIG['canonical']['aliases']
MISSING_URL = CONFIG['table']['missing_url']
NO_OUTGOING = CONFIG['table']['no_outgoing']
CUSTOM_EDGES = CONFIG['custom_edges']

__all__ = [
    'CONFIG', 'SPARQL_ENDPOINT', 'GPML_ENDPOINT', 'HTTP_TIMEOUT', 'MIN_OVERLAP',
    'LABEL_ALIASES', 'MISSING_URL', 'NO_OUTGOING', 'CUSTOM_EDGES'
]
