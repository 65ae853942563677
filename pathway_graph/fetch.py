"""WikiPathways source fetchers (SPARQL endpoint + GPML web service).

No retries: any network, status or decoding failure becomes a
PathwayFetchError and aborts the build. Both sources are fetched together by
`fetch_sources`; if either fails the whole join fails.
"""
from __future__ import annotations
import asyncio
import re
from typing import Any, Callable, Dict, List, Optional, Tuple

import requests

from . import config
from .errors import PathwayFetchError

PATHWAY_ID_RE = re.compile(r'^WP\d+$')

SPARQL_PREFIXES = """
PREFIX wp: <http://vocabularies.wikipathways.org/wp#>
PREFIX dc: <http://purl.org/dc/elements/1.1/>
PREFIX dcterms: <http://purl.org/dc/terms/>
PREFIX rdfs: <http://www.w3.org/2000/01/rdf-schema#>
"""


def normalize_pathway_id(pathway_id: str) -> str:
    """'wp17' -> 'WP17', '17' -> 'WP17'. Raises ValueError when still invalid."""
    pid = (pathway_id or '').strip().upper()
    if pid.isdigit():
        pid = 'WP' + pid
    if not PATHWAY_ID_RE.match(pid):
        raise ValueError(f'Invalid pathway id: {pathway_id!r}')
    return pid


def build_interaction_query(pathway_id: str) -> str:
    pid = normalize_pathway_id(pathway_id)
    return SPARQL_PREFIXES + f"""
SELECT DISTINCT
    ?source ?sourceLabel
    ?target ?targetLabel
    ?interaction
    ?interactionType
    ?sourceType
    ?targetType
    ?pathwayTitle
WHERE {{
  ?pathway a wp:Pathway ;
           dcterms:identifier "{pid}" ;
           dc:title ?pathwayTitle .

  ?interaction a wp:Interaction ;
               dcterms:isPartOf ?pathway ;
               wp:source ?source ;
               wp:target ?target .

  ?source rdfs:label ?sourceLabel .
  ?target rdfs:label ?targetLabel .

  OPTIONAL {{ ?source a ?sourceType . }}
  OPTIONAL {{ ?target a ?targetType . }}
  OPTIONAL {{ ?interaction a ?interactionType . }}
}}
"""


def build_gene_product_query(pathway_id: str) -> str:
    pid = normalize_pathway_id(pathway_id)
    return SPARQL_PREFIXES + f"""
SELECT DISTINCT ?geneProduct ?geneProductLabel
WHERE {{
  ?geneProduct a wp:GeneProduct ;
               rdfs:label ?geneProductLabel ;
               dcterms:isPartOf ?pathway .
  ?pathway a wp:Pathway ;
           dcterms:identifier "{pid}" .
}}
"""


def gene_product_map(bindings: List[Dict[str, Any]]) -> Dict[str, str]:
    """Gene-product label -> IRI from SPARQL bindings (later rows win)."""
    out: Dict[str, str] = {}
    for b in bindings or []:
        label = (b.get('geneProductLabel') or {}).get('value')
        iri = (b.get('geneProduct') or {}).get('value')
        if label and iri:
            out[label] = iri
    return out


def _get(url: str, source: str, pathway_id: str, session=None, **kwargs) -> requests.Response:
    http = session or requests
    headers = kwargs.pop('headers', {})
    headers.setdefault('User-Agent', config.CONFIG['http']['user_agent'])
    try:
        resp = http.get(url, headers=headers, timeout=config.HTTP_TIMEOUT, **kwargs)
    except requests.RequestException as e:
        raise PathwayFetchError(source, pathway_id, f'network error: {e}') from e
    if resp.status_code != 200:
        raise PathwayFetchError(source, pathway_id, f'HTTP {resp.status_code}')
    return resp


def run_sparql(query: str, pathway_id: str, session=None) -> List[Dict[str, Any]]:
    resp = _get(
        config.SPARQL_ENDPOINT, 'sparql', pathway_id, session,
        params={'query': query},
        headers={'Accept': config.CONFIG['sparql']['accept']},
    )
    try:
        payload = resp.json()
        return list(payload['results']['bindings'])
    except (ValueError, KeyError, TypeError) as e:
        raise PathwayFetchError('sparql', pathway_id, f'invalid JSON payload: {e}') from e


def fetch_interactions(pathway_id: str, session=None) -> List[Dict[str, Any]]:
    return run_sparql(build_interaction_query(pathway_id), pathway_id, session)


def fetch_gene_products(pathway_id: str, session=None) -> Dict[str, str]:
    return gene_product_map(run_sparql(build_gene_product_query(pathway_id), pathway_id, session))


def fetch_gpml(pathway_id: str, revision: Optional[int] = None, session=None) -> str:
    """Return the raw GPML text of a pathway revision (0 = latest)."""
    rev = config.CONFIG['gpml']['revision'] if revision is None else revision
    resp = _get(
        config.GPML_ENDPOINT, 'gpml', pathway_id, session,
        params={'pwId': normalize_pathway_id(pathway_id), 'format': 'json', 'revision': rev},
    )
    try:
        gpml = resp.json()['pathway']['gpml']
    except (ValueError, KeyError, TypeError) as e:
        raise PathwayFetchError('gpml', pathway_id, f'invalid JSON payload: {e}') from e
    if not gpml:
        raise PathwayFetchError('gpml', pathway_id, 'empty GPML document')
    return gpml


async def _cancel(tasks) -> None:
    for t in tasks:
        t.cancel()
    # collect the sibling's outcome so a late failure is never left unretrieved
    await asyncio.gather(*tasks, return_exceptions=True)


async def fetch_sources(
    pathway_id: str,
    sparql_fetcher: Optional[Callable[[str], List[Dict[str, Any]]]] = None,
    gpml_fetcher: Optional[Callable[[str], str]] = None,
) -> Tuple[List[Dict[str, Any]], str]:
    """Fetch SPARQL bindings and GPML text concurrently.

    Fail-fast: the first failure cancels the join and is re-raised as a
    PathwayFetchError.
    """
    sparql_fetcher = sparql_fetcher or fetch_interactions
    gpml_fetcher = gpml_fetcher or fetch_gpml
    tasks = [
        asyncio.ensure_future(asyncio.to_thread(sparql_fetcher, pathway_id)),
        asyncio.ensure_future(asyncio.to_thread(gpml_fetcher, pathway_id)),
    ]
    try:
        bindings, gpml = await asyncio.gather(*tasks)
    except PathwayFetchError:
        await _cancel(tasks)
        raise
    except Exception as e:
        await _cancel(tasks)
        raise PathwayFetchError('fetch', pathway_id, str(e)) from e
    return bindings, gpml


__all__ = [
    'PATHWAY_ID_RE', 'normalize_pathway_id', 'build_interaction_query', 'build_gene_product_query',
    'gene_product_map', 'run_sparql', 'fetch_interactions', 'fetch_gene_products', 'fetch_gpml', 'fetch_sources'
]
