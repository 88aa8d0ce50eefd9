"""Data models for catalog assets and their predicted genres."""
from __future__ import annotations

from typing import Any, Iterable, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AssetRecord(BaseModel):
    """Identifying metadata for a single catalog item."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., min_length=1, description="Identifier unique within one run")
    title: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def _title_null(cls, value: Any) -> Any:
        return "" if value is None else value


class GenrePrediction(BaseModel):
    """Response body of the genre prediction service."""

    genres: List[str]


class AggregatedRecord(BaseModel):
    """An asset joined with the genres predicted for it.

    A ``null`` title or genre list, as found in older aggregated data, reads as empty.
    """

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    title: str = ""
    genres: List[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def _title_null(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("genres", mode="before")
    @classmethod
    def _genres_null(cls, value: Any) -> Any:
        return [] if value is None else value

    @classmethod
    def from_asset(cls, asset: AssetRecord, genres: Iterable[str]) -> "AggregatedRecord":
        return cls(id=asset.id, title=asset.title, genres=list(genres))


class PredictionFailure(BaseModel):
    """Diagnostic entry for an asset whose prediction failed."""

    asset_id: str
    error_type: str
    message: str


class AggregationResult(BaseModel):
    """Successful records and per-asset failures of one aggregation pass."""

    records: List[AggregatedRecord] = Field(default_factory=list)
    failures: List[PredictionFailure] = Field(default_factory=list)

    @property
    def failed_ids(self) -> List[str]:
        return [failure.asset_id for failure in self.failures]
