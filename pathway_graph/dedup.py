"""URI-level deduplication of raw interaction rows.

Runs before any label canonicalization. The first label observed for a URI
becomes authoritative for every later row that mentions the URI, and only
the first row for a (source URI, target URI) pair survives.
"""
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .schema import QueryRow

logger = logging.getLogger(__name__)


def _canonical(labels: Dict[str, str], uri: str, label) -> Optional[str]:
    # only a label that is actually present becomes authoritative for its URI
    if uri not in labels and label:
        labels[uri] = label
    return labels.get(uri)


def remove_duplicate_interactions(rows: Iterable[QueryRow]) -> List[QueryRow]:
    seen: Set[Tuple[str, str]] = set()
    labels: Dict[str, str] = {}
    result: List[QueryRow] = []
    dropped = 0
    for row in rows:
        if not row.has_uris():
            dropped += 1
            continue
        src_label = _canonical(labels, row.source, row.source_label)
        tgt_label = _canonical(labels, row.target, row.target_label)
        pair = (row.source, row.target)
        if pair in seen:
            logger.debug('skip duplicate row %s -> %s', *pair)
            continue
        seen.add(pair)
        result.append(row.model_copy(update={'source_label': src_label, 'target_label': tgt_label}))
    if dropped:
        logger.debug('dropped %d rows without source/target URI', dropped)
    return result


__all__ = ['remove_duplicate_interactions']
