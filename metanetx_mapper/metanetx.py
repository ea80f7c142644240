"""Utilities for resolving metabolites through the MetaNetX web service.

Two endpoints of MetaNetX_ are used.  Identifiers are looked up with the
``id-mapper`` which answers with the entity and all of its cross-references.
Free-text names go through ``search`` first; the MetaNetX identifier of the
first hit is then fed back into the ``id-mapper``.

Queries are prefixed with ``+`` which makes MetaNetX require an exact token
match rather than a fuzzy one.  When several compounds match, the first one
is used.

.. _MetaNetX: https://www.metanetx.org
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

import requests

from .errors import InvalidInputTypeError, MalformedResponseError, RemoteLookupError
from .records import LookupRequest, MetaboliteRecord, select_field, validate_output_style
from .xrefs import parse_id_mapper_response

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

ID_MAPPER_URL = "https://beta.metanetx.org/cgi-bin/mnxweb/id-mapper"
SEARCH_URL = "https://beta.metanetx.org/cgi-bin/mnxweb/search"

# ``None`` leaves the timeout to the transport, i.e. block until answered.
DEFAULT_TIMEOUT: Optional[float] = None

EXACT_MATCH_MARKER = "+"
VMH_PREFIX = "vmhM:"
CHEBI_PREFIX = "CHEBI:"

NAMESPACE_PREFIXES: Dict[str, str] = {
    "id": "",
    "name": "",
    "vmh": VMH_PREFIX,
    "chebi": CHEBI_PREFIX,
}
INPUT_TYPES = tuple(NAMESPACE_PREFIXES)

# Key of a search hit that is passed on to the id-mapper.
FOLLOW_UP_KEY = "mnx_id"


# ---------------------------------------------------------------------------
# Session helper
# ---------------------------------------------------------------------------

def _get_session(session: Optional[requests.Session] = None) -> requests.Session:
    """Return ``session`` or a fresh :class:`requests.Session`."""

    if session is not None:
        return session
    return requests.Session()


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------

class MetaNetXClient:
    """Thin wrapper around the two MetaNetX endpoints.

    Parameters
    ----------
    session:
        Optional :class:`requests.Session` for connection pooling.
    id_mapper_url, search_url:
        Endpoint URLs, defaulting to :data:`ID_MAPPER_URL` and
        :data:`SEARCH_URL`.
    timeout:
        Seconds to wait for an answer; ``None`` waits indefinitely.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        *,
        id_mapper_url: str = ID_MAPPER_URL,
        search_url: str = SEARCH_URL,
        timeout: Optional[float] = DEFAULT_TIMEOUT,
    ) -> None:
        self.session = _get_session(session)
        self.id_mapper_url = id_mapper_url
        self.search_url = search_url
        self.timeout = timeout

    def fetch_by_id(self, query: str) -> Any:
        """Query the id-mapper for ``query`` and return the decoded JSON."""

        params = {
            "query_index": "chem",
            "output_format": "JSON",
            "query_list": query,
        }
        return self._get_json(self.id_mapper_url, params, query)

    def search_by_name(self, query: str) -> Any:
        """Run a chemical name search for ``query`` and return the decoded JSON."""

        params = {"format": "json", "db": "chem", "query": query}
        return self._get_json(self.search_url, params, query)

    def _get_json(self, url: str, params: Dict[str, str], query: str) -> Any:
        """GET ``url`` and decode the body; a blank body yields ``None``.

        Raises
        ------
        RemoteLookupError
            On transport failures, HTTP error statuses or undecodable JSON.
        """

        logger.debug("Requesting %s for %s", url, query)
        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            msg = f"MetaNetX request for '{query}' failed: {exc}"
            logger.error(msg)
            raise RemoteLookupError(msg) from exc

        if not response.text.strip():
            logger.debug("Empty body from %s for %s", url, query)
            return None
        try:
            return response.json()
        except ValueError as exc:
            msg = f"MetaNetX returned invalid JSON for '{query}'"
            logger.error(msg)
            raise RemoteLookupError(msg) from exc


# ---------------------------------------------------------------------------
# Core functionality
# ---------------------------------------------------------------------------

def build_lookup_request(token: Any, input_type: Optional[str] = "id") -> LookupRequest:
    """Normalize ``token`` into the query string sent to MetaNetX.

    Parameters
    ----------
    token:
        Metabolite identifier or name.  Non-string values are converted with
        :func:`str`; ``None`` is treated as an empty token.
    input_type:
        ``"id"`` (default) for a bare identifier, ``"name"`` for a free-text
        search, ``"vmh"`` or ``"chebi"`` to prefix the token with the VMH or
        ChEBI namespace.  Case-insensitive.

    Returns
    -------
    LookupRequest
        Request whose ``query`` carries the namespace prefix and a leading
        ``+``.  An empty token stays empty.

    Raises
    ------
    InvalidInputTypeError
        If ``input_type`` is not recognised.
    """

    text = "" if token is None else str(token)
    kind = "id" if input_type is None else str(input_type).lower()
    if kind not in NAMESPACE_PREFIXES:
        msg = (
            f"Unrecognized input type '{input_type}'; expected one of "
            f"{', '.join(INPUT_TYPES)}"
        )
        logger.error(msg)
        raise InvalidInputTypeError(msg)

    query = text
    if query:
        query = NAMESPACE_PREFIXES[kind] + query
        if not query.startswith(EXACT_MATCH_MARKER):
            query = EXACT_MATCH_MARKER + query
    return LookupRequest(token=text, input_type=kind, query=query, by_name=kind == "name")


def follow_up_key(hits: Any) -> str:
    """Return the MetaNetX identifier of the first search hit.

    Raises
    ------
    MalformedResponseError
        If the first hit is not an object carrying ``mnx_id``.
    """

    first = hits[0] if isinstance(hits, list) else hits
    if not isinstance(first, dict) or not isinstance(first.get(FOLLOW_UP_KEY), str):
        msg = f"Search hit is missing '{FOLLOW_UP_KEY}'"
        logger.error(msg)
        raise MalformedResponseError(msg)
    if isinstance(hits, list) and len(hits) > 1:
        logger.debug("Search returned %d hits, using the first", len(hits))
    return first[FOLLOW_UP_KEY]


def resolve_metabolite(
    token: Any,
    input_type: Optional[str] = "id",
    *,
    client: Optional[MetaNetXClient] = None,
    session: Optional[requests.Session] = None,
) -> MetaboliteRecord:
    """Resolve ``token`` to a :class:`MetaboliteRecord`.

    The decision logic is:

    * An empty token returns an empty record without contacting MetaNetX.
    * ``input_type="name"`` searches for the name, takes the first hit and
      looks its MetaNetX identifier up in the id-mapper.
    * Any other input type looks the (prefixed) token up in the id-mapper.

    Parameters
    ----------
    token:
        Metabolite identifier or name.
    input_type:
        See :func:`build_lookup_request`.
    client:
        Object providing ``fetch_by_id`` and ``search_by_name``.  Defaults to
        a :class:`MetaNetXClient` built on ``session``.
    session:
        Optional :class:`requests.Session`, ignored when ``client`` is given.

    Returns
    -------
    MetaboliteRecord
        Resolved record.  All fields are empty when nothing matched.

    Raises
    ------
    InvalidInputTypeError
        If ``input_type`` is not recognised.  Raised before any request.
    RemoteLookupError
        If MetaNetX cannot be reached or its answer cannot be parsed.
    """

    request = build_lookup_request(token, input_type)
    if not request.query:
        logger.debug("Skipping lookup for empty token")
        return MetaboliteRecord()

    mnx = client if client is not None else MetaNetXClient(session)

    if request.by_name:
        hits = mnx.search_by_name(request.query)
        if not hits:
            logger.info("No MetaNetX entry found for %s", request.token)
            return MetaboliteRecord()
        data = mnx.fetch_by_id(follow_up_key(hits))
    else:
        data = mnx.fetch_by_id(request.query)

    record = parse_id_mapper_response(data)
    if record.is_empty():
        logger.info("No MetaNetX entry found for %s", request.token)
    return record


def lookup_metabolite(
    token: Any,
    input_type: Optional[str] = "id",
    output_style: Optional[str] = None,
    *,
    client: Optional[MetaNetXClient] = None,
    session: Optional[requests.Session] = None,
) -> Union[MetaboliteRecord, str]:
    """Resolve ``token`` and optionally return a single field.

    With ``output_style`` left as ``None`` the full record is returned.
    Otherwise only the named field (``"name"``, ``"metanetx"``, ``"vmh"``,
    ``"chebi"``, ``"hmdb"``, ``"kegg"``, ``"bigg"`` or ``"swisslipids"``) is
    returned as a string.  Both arguments are validated before any request
    is made.
    """

    if output_style is not None:
        validate_output_style(output_style)
    record = resolve_metabolite(token, input_type, client=client, session=session)
    if output_style is None:
        return record
    return select_field(record, output_style)
