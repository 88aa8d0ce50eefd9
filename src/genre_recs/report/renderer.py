"""Render aggregated records into the downloadable CSV report."""
from __future__ import annotations

from typing import Iterable, List

import pandas as pd

from genre_recs.catalog.models import AggregatedRecord
from genre_recs.pipeline.artifacts import SerializationFailure

REPORT_COLUMNS: List[str] = ["ID", "Title", "Genres"]
GENRE_SEPARATOR = "|"
DELIMITER = ","
QUOTE = '"'
LINE_TERMINATOR = "\n"


def encode_genres(genres: Iterable[str]) -> str:
    return GENRE_SEPARATOR.join(genres)


def quote_field(value: str) -> str:
    """Quote a field holding the delimiter, a quote, a line break or leading whitespace."""
    needs_quotes = (
        DELIMITER in value
        or QUOTE in value
        or "\r" in value
        or "\n" in value
        or value[:1] in (" ", "\t")
    )
    if not needs_quotes:
        return value
    return QUOTE + value.replace(QUOTE, QUOTE * 2) + QUOTE


def build_report_frame(records: Iterable[AggregatedRecord]) -> pd.DataFrame:
    rows = [[record.id, record.title, encode_genres(record.genres)] for record in records]
    return pd.DataFrame(rows, columns=REPORT_COLUMNS, dtype=object)


def render_report(records: Iterable[AggregatedRecord]) -> bytes:
    """Return the report as UTF-8 CSV bytes, header row first.

    Rendering is all-or-nothing: any failure raises ``SerializationFailure``.
    """
    frame = build_report_frame(records).map(quote_field)
    lines = [DELIMITER.join(quote_field(column) for column in frame.columns)]
    lines.extend(DELIMITER.join(row) for row in frame.itertuples(index=False, name=None))
    try:
        return "".join(line + LINE_TERMINATOR for line in lines).encode("utf-8")
    except UnicodeEncodeError as exc:
        raise SerializationFailure(f"Error writing report: {exc}") from exc
