"""Shared fixtures for pipeline tests."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Optional

import pytest
import requests

from genre_recs.catalog.models import AssetRecord
from genre_recs.config import Settings
from genre_recs.prediction.client import PredictionError
from genre_recs.storage.object_store import InMemoryObjectStore


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self.text = text if text is not None else json.dumps(body)

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self) -> Any:
        return json.loads(self.text)


class FakeSession:
    """Records posted payloads and replays a canned response or exception."""

    def __init__(self, response: Optional[FakeResponse] = None, exc: Optional[Exception] = None) -> None:
        self.response = response
        self.exc = exc
        self.calls: List[Dict[str, Any]] = []

    def post(self, url: str, json: Any = None, timeout: Optional[float] = None) -> FakeResponse:
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response


class ScriptedPredictor:
    """Predictor returning genres or raising per asset id."""

    def __init__(self, outcomes: Dict[str, Any]) -> None:
        self.outcomes = outcomes
        self.seen: List[str] = []

    def predict(self, asset: AssetRecord) -> List[str]:
        self.seen.append(asset.id)
        outcome = self.outcomes[asset.id]
        if isinstance(outcome, PredictionError):
            raise outcome
        return list(outcome)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        aws_region="us-east-1",
        s3_bucket="test-bucket",
        asset_info_key="assets/asset_info.json",
        aggregated_data_key="aggregated_data.json",
        recommendations_key="recommendations/",
        report_filename="recommendations.csv",
        ds_service_url="http://ds.test/predict",
        _env_file=None,
    )


@pytest.fixture
def store() -> InMemoryObjectStore:
    return InMemoryObjectStore()


@pytest.fixture
def connection_error() -> requests.ConnectionError:
    return requests.ConnectionError("connection refused")
