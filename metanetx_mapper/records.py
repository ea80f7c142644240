"""Record types produced and consumed by the MetaNetX lookup."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
import logging
from typing import Dict

from .errors import InvalidOutputStyleError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupRequest:
    """A single normalized lookup.

    ``query`` is the string actually sent to MetaNetX: ``token`` with the
    namespace prefix for ``input_type`` and the leading ``+`` exact-match
    marker applied.
    """

    token: str
    input_type: str
    query: str
    by_name: bool = False


@dataclass(frozen=True)
class MetaboliteRecord:
    """Cross-references of one MetaNetX chemical entity.

    Every field is an empty string unless it was found in the response.
    """

    name: str = ""
    metanetx: str = ""
    vmh: str = ""
    chebi: str = ""
    hmdb: str = ""
    kegg: str = ""
    bigg: str = ""
    swisslipids: str = ""

    def as_dict(self) -> Dict[str, str]:
        """Return the record as a plain ``dict`` in field order."""

        return asdict(self)

    def is_empty(self) -> bool:
        return not any(asdict(self).values())


OUTPUT_STYLES = tuple(f.name for f in fields(MetaboliteRecord))


def select_field(record: MetaboliteRecord, output_style: str) -> str:
    """Return the value of ``record`` selected by ``output_style``.

    Parameters
    ----------
    record:
        Resolved metabolite record.
    output_style:
        One of ``name``, ``metanetx``, ``vmh``, ``chebi``, ``hmdb``,
        ``kegg``, ``bigg`` or ``swisslipids``. Case-insensitive.

    Raises
    ------
    InvalidOutputStyleError
        If ``output_style`` does not name a record field.
    """

    style = validate_output_style(output_style)
    return getattr(record, style)


def validate_output_style(output_style: str) -> str:
    """Return ``output_style`` lower-cased, raising if it is unknown."""

    style = str(output_style).lower()
    if style not in OUTPUT_STYLES:
        msg = (
            f"Unrecognized output style '{output_style}'; expected one of "
            f"{', '.join(OUTPUT_STYLES)}"
        )
        logger.error(msg)
        raise InvalidOutputStyleError(msg)
    return style
