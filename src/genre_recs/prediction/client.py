"""Client for the external genre prediction service."""
from __future__ import annotations

from typing import List, Optional, Protocol

import requests
from pydantic import ValidationError

from genre_recs.catalog.models import AssetRecord, GenrePrediction


class PredictionError(RuntimeError):
    """Base class for failures of a single genre prediction."""


class TransportFailure(PredictionError):
    """Raised when the request could not be sent or no response arrived."""


class ServiceError(PredictionError):
    """Raised when the prediction service answers with a non-success status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Prediction service error {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class DecodeFailure(PredictionError):
    """Raised when the response body is not a valid genre prediction."""


class GenrePredictor(Protocol):
    """Anything able to predict genres for one asset."""

    def predict(self, asset: AssetRecord) -> List[str]:
        ...


class GenrePredictionClient:
    """Thin wrapper around the prediction endpoint that maps failures to typed errors."""

    def __init__(
        self,
        service_url: str,
        timeout: float = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.service_url = service_url
        self.timeout = timeout
        self.session = session or requests.Session()

    def predict(self, asset: AssetRecord) -> List[str]:
        """Return the genres predicted for ``asset`` in service order.

        One request per call, no retry. Raises ``TransportFailure``,
        ``ServiceError`` or ``DecodeFailure``.
        """
        if not asset.id:
            raise ValueError("asset id must be non-empty")

        payload = {"id": asset.id, "title": asset.title}
        try:
            response = self.session.post(self.service_url, json=payload, timeout=self.timeout)
        except requests.RequestException as exc:
            raise TransportFailure(f"Request to {self.service_url} failed: {exc}") from exc

        if not response.ok:
            raise ServiceError(response.status_code, response.text)

        try:
            body = response.json()
        except ValueError as exc:
            raise DecodeFailure(f"Response is not valid JSON: {exc}") from exc

        try:
            prediction = GenrePrediction.model_validate(body)
        except ValidationError as exc:
            raise DecodeFailure(f"Unexpected response structure: {exc}") from exc
        return prediction.genres
