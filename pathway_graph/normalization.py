from __future__ import annotations
"""Label normalization, fuzzy key resolution and display-label arbitration.

All helpers are heuristic and total: they never raise and do not depend on
external ontologies. Key resolution is greedy and order dependent; callers
pass existing keys in the order they were created so that results are
reproducible for a given row order.
"""
import re
from typing import Iterable, Mapping, Optional

from . import config

_NON_CORE_RE = re.compile(r'[^A-Z0-9/]')
_NON_ALNUM_RE = re.compile(r'[^A-Z0-9]')


def clean_label(label: Optional[str]) -> str:
    """Uppercase and keep only A-Z/0-9 (no segment truncation)."""
    if not label:
        return ''
    return _NON_ALNUM_RE.sub('', label.strip().upper())


def normalize_label(label: Optional[str], aliases: Optional[Mapping[str, str]] = None) -> str:
    """Return the comparable core of a raw label.

    'PI3K/AKT' -> 'PI3K', ' p-ERK ' -> 'PERK'. The alias table may replace the
    resulting token wholesale. Empty or missing input yields ''.
    """
    if not label:
        return ''
    cleaned = _NON_CORE_RE.sub('', label.strip().upper())
    core = cleaned.split('/', 1)[0]
    table = config.LABEL_ALIASES if aliases is None else aliases
    return table.get(core, core)


def resolve_key(core: str, existing_keys: Iterable[str], min_overlap: Optional[int] = None) -> str:
    """Map a core onto the first existing key it prefix-matches, else mint it.

    A match needs the shorter of the two strings to be at least `min_overlap`
    long and one of them to be a prefix of the other. First match wins.
    """
    threshold = config.MIN_OVERLAP if min_overlap is None else min_overlap
    for key in existing_keys:
        if min(len(key), len(core)) < threshold:
            continue
        if key.startswith(core) or core.startswith(key):
            return key
    return core


def _extra(cleaned: str, core_key: str) -> str:
    if cleaned.startswith(core_key):
        return cleaned[len(core_key):]
    return ''


def choose_better_label(current: str, new: str, core_key: str) -> str:
    """Pick the label to display for `core_key` when a new mention arrives.

    The base form beats a numbered variant ('PIP' over 'PIP3'); otherwise the
    longer label wins and ties keep the current one.
    """
    extra_cur = _extra(clean_label(current), core_key)
    extra_new = _extra(clean_label(new), core_key)
    if not extra_cur and extra_new.isdigit():
        return current
    if not extra_new and extra_cur.isdigit():
        return new
    return new if len(new) > len(current) else current


__all__ = ['clean_label', 'normalize_label', 'resolve_key', 'choose_better_label']
