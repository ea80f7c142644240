"""Resolve metabolite identifiers and names through MetaNetX."""

from .errors import (
    InvalidInputTypeError,
    InvalidOutputStyleError,
    MalformedResponseError,
    MetaNetXError,
    RemoteLookupError,
)
from .io_utils import record_to_json, records_to_frame, write_record_csv
from .metanetx import (
    MetaNetXClient,
    build_lookup_request,
    lookup_metabolite,
    resolve_metabolite,
)
from .records import LookupRequest, MetaboliteRecord, select_field
from .xrefs import extract_xrefs, parse_id_mapper_response

__all__ = [
    "MetaNetXError",
    "InvalidInputTypeError",
    "InvalidOutputStyleError",
    "RemoteLookupError",
    "MalformedResponseError",
    "LookupRequest",
    "MetaboliteRecord",
    "select_field",
    "extract_xrefs",
    "parse_id_mapper_response",
    "MetaNetXClient",
    "build_lookup_request",
    "resolve_metabolite",
    "lookup_metabolite",
    "records_to_frame",
    "write_record_csv",
    "record_to_json",
]
