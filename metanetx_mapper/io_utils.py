"""Output helpers for resolved metabolite records.

Thin wrappers around pandas so a record can be written next to the tables
it is usually merged with.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Iterable

import pandas as pd

from .records import OUTPUT_STYLES, MetaboliteRecord

logger = logging.getLogger(__name__)


def records_to_frame(records: Iterable[MetaboliteRecord]) -> pd.DataFrame:
    """Return ``records`` as a DataFrame with one column per record field."""

    rows = [record.as_dict() for record in records]
    return pd.DataFrame(rows, columns=list(OUTPUT_STYLES))


def write_record_csv(
    record: MetaboliteRecord,
    path: str | Path,
    *,
    sep: str = ",",
    encoding: str = "utf-8",
    **to_csv_kwargs: Any,
) -> None:
    """Write ``record`` as a single-row CSV.

    Parameters
    ----------
    record:
        Record to save.
    path:
        Destination file path.
    sep:
        Field separator.
    encoding:
        Text encoding for the output file.
    to_csv_kwargs:
        Additional keyword arguments forwarded to :meth:`pandas.DataFrame.to_csv`.
    """

    path = Path(path)
    logger.debug("Writing record %s to %s", record.metanetx or "<empty>", path)
    records_to_frame([record]).to_csv(
        path, sep=sep, encoding=encoding, index=False, **to_csv_kwargs
    )


def record_to_json(record: MetaboliteRecord) -> str:
    """Serialise ``record`` as a JSON object."""

    return json.dumps(record.as_dict())
