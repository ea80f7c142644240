"""Exception types raised by the MetaNetX lookup helpers."""

from __future__ import annotations


class MetaNetXError(Exception):
    """Base class for all errors raised by :mod:`metanetx_mapper`."""


class InvalidInputTypeError(MetaNetXError, ValueError):
    """The input type tag is not one of ``id``, ``name``, ``vmh`` or ``chebi``."""


class InvalidOutputStyleError(MetaNetXError, ValueError):
    """The requested output style does not name a record field."""


class RemoteLookupError(MetaNetXError):
    """The MetaNetX service could not be reached or returned an error.

    The underlying :mod:`requests` exception, when there is one, is available
    as ``__cause__``.
    """


class MalformedResponseError(RemoteLookupError):
    """The service answered with JSON that does not have the expected shape."""
