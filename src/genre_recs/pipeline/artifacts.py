"""Encoding and decoding of the JSON artifacts exchanged through object storage."""
from __future__ import annotations

import json
from typing import Any, List, Sequence

from pydantic import ValidationError

from genre_recs.catalog.models import AggregatedRecord, AssetRecord


class SerializationFailure(ValueError):
    """Raised when an artifact cannot be decoded or encoded."""


def _load_json(payload: bytes, what: str) -> Any:
    try:
        return json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise SerializationFailure(f"Error parsing {what}: {exc}") from exc


def decode_asset_list(payload: bytes) -> List[AssetRecord]:
    """Parse the asset info document: a JSON array of ``{id, title}`` objects."""
    data = _load_json(payload, "asset info")
    if not isinstance(data, list):
        raise SerializationFailure(f"Asset info must be a JSON array, got {type(data).__name__}")

    try:
        assets = [AssetRecord.model_validate(item) for item in data]
    except ValidationError as exc:
        raise SerializationFailure(f"Invalid asset record: {exc}") from exc

    seen = set()
    for asset in assets:
        if asset.id in seen:
            raise SerializationFailure(f"Duplicate asset id {asset.id!r} in asset info")
        seen.add(asset.id)
    return assets


def encode_aggregated(records: Sequence[AggregatedRecord]) -> bytes:
    """Serialize aggregated records in order, ``[]`` when there are none."""
    try:
        return json.dumps([record.model_dump() for record in records]).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise SerializationFailure(f"Error serializing aggregated data: {exc}") from exc


def decode_aggregated(payload: bytes) -> List[AggregatedRecord]:
    """Parse the intermediate artifact back into aggregated records.

    A bare ``null`` document is read as an empty sequence.
    """
    data = _load_json(payload, "aggregated data")
    if data is None:
        return []
    if not isinstance(data, list):
        raise SerializationFailure(f"Aggregated data must be a JSON array, got {type(data).__name__}")

    try:
        return [AggregatedRecord.model_validate(item) for item in data]
    except ValidationError as exc:
        raise SerializationFailure(f"Invalid aggregated record: {exc}") from exc
