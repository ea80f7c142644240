"""Parsing of MetaNetX id-mapper payloads into :class:`MetaboliteRecord`.

The id-mapper answers with an object keyed by the queried token::

    {"+ivcrn": {"mnx_id": "MNXM1101229", "name": "...",
                "xrefs": ["chebi:70819", "vmhM:ivcrn", ...]}}

Cross-references are plain ``"NAMESPACE:VALUE"`` strings.  Each output field
is filled from the *first* entry whose lower-cased text contains the
corresponding marker; later entries usually point at related compounds.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .errors import MalformedResponseError
from .records import MetaboliteRecord

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

# (marker, record field, keep the whole entry instead of the part after ":")
XREF_RULES: Tuple[Tuple[str, str, bool], ...] = (
    ("chebi", "chebi", False),
    ("hmdb", "hmdb", False),
    ("vmhm", "vmh", False),
    ("slm", "swisslipids", True),
    ("kegg.compound", "kegg", False),
    ("bigg.metabolite", "bigg", False),
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _first_match(xrefs: List[str], marker: str) -> Optional[str]:
    """Return the first entry of ``xrefs`` containing ``marker`` (any case)."""

    for ref in xrefs:
        if marker in ref.lower():
            return ref
    return None


def _after_colon(ref: str) -> str:
    """Return the text after the first ``:`` of ``ref``."""

    _, _, value = ref.partition(":")
    return value


def extract_xrefs(xrefs: Iterable[str]) -> Dict[str, str]:
    """Map cross-reference strings onto record fields.

    Parameters
    ----------
    xrefs:
        ``"NAMESPACE:VALUE"`` strings in the order MetaNetX returned them.

    Returns
    -------
    dict
        Record field name to value for every rule in :data:`XREF_RULES`
        that matched.  Fields without a match are absent.
    """

    refs = [str(ref) for ref in xrefs]
    found: Dict[str, str] = {}
    for marker, field, keep_whole in XREF_RULES:
        ref = _first_match(refs, marker)
        if ref is None:
            continue
        found[field] = ref if keep_whole else _after_colon(ref)
    return found


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def unwrap_id_mapper_response(data: Any) -> Dict[str, Any]:
    """Return the entry stored under the first key of an id-mapper payload.

    An empty payload or an empty entry yields ``{}``.

    Raises
    ------
    MalformedResponseError
        If ``data`` or the entry it holds is not a JSON object.
    """

    if not data:
        return {}
    if not isinstance(data, dict):
        msg = f"Expected a JSON object from id-mapper, got {type(data).__name__}"
        logger.error(msg)
        raise MalformedResponseError(msg)

    key = next(iter(data))
    entry = data[key]
    if not entry:
        logger.debug("Id-mapper returned no fields for %s", key)
        return {}
    if not isinstance(entry, dict):
        msg = f"Expected a JSON object for '{key}', got {type(entry).__name__}"
        logger.error(msg)
        raise MalformedResponseError(msg)
    return entry


def parse_id_mapper_response(data: Any) -> MetaboliteRecord:
    """Build a :class:`MetaboliteRecord` from an id-mapper payload.

    Parameters
    ----------
    data:
        Decoded JSON as returned by the id-mapper endpoint, or ``None`` when
        no request was made.

    Returns
    -------
    MetaboliteRecord
        Record with ``metanetx`` and ``name`` taken from ``mnx_id`` and
        ``name`` and the remaining identifiers extracted from ``xrefs``.  An
        empty payload gives a record whose fields are all empty.

    Raises
    ------
    MalformedResponseError
        If the payload is not shaped like an id-mapper answer.
    """

    entry = unwrap_id_mapper_response(data)
    if not entry:
        return MetaboliteRecord()

    mnx_id = entry.get("mnx_id")
    if not isinstance(mnx_id, str):
        msg = "Id-mapper entry is missing 'mnx_id'"
        logger.error(msg)
        raise MalformedResponseError(msg)

    xrefs = entry.get("xrefs") or []
    if not isinstance(xrefs, list):
        msg = f"Expected 'xrefs' to be a list, got {type(xrefs).__name__}"
        logger.error(msg)
        raise MalformedResponseError(msg)

    name = entry.get("name")
    ids = extract_xrefs(xrefs)
    logger.debug("Parsed %s with %d xrefs", mnx_id, len(xrefs))
    return MetaboliteRecord(
        name="" if name is None else str(name),
        metanetx=mnx_id,
        **ids,
    )
