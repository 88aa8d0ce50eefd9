"""Object storage backends used to exchange pipeline artifacts."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol, Tuple

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from genre_recs.config import Settings

logger = logging.getLogger(__name__)

MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


class StorageFailure(RuntimeError):
    """Raised when an object cannot be fetched from or stored to the backend."""

    def __init__(self, message: str, bucket: str, key: str) -> None:
        super().__init__(f"{message} (s3://{bucket}/{key})")
        self.bucket = bucket
        self.key = key


class ObjectNotFound(StorageFailure):
    """Raised when the requested key does not exist."""


class ObjectStore(Protocol):
    """Minimal interface for object storage providers."""

    def get(self, bucket: str, key: str) -> bytes:
        ...

    def put(self, bucket: str, key: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        ...


def make_s3_client(settings: Settings) -> Any:
    """Build a boto3 S3 client with path-style addressing."""
    return boto3.client(
        "s3",
        region_name=settings.aws_region,
        endpoint_url=settings.s3_endpoint_url,
        config=Config(s3={"addressing_style": "path"}),
    )


class S3ObjectStore:
    """ObjectStore backed by Amazon S3 or an S3-compatible endpoint."""

    def __init__(self, client: Any) -> None:
        self.client = client

    @classmethod
    def from_settings(cls, settings: Settings) -> "S3ObjectStore":
        return cls(make_s3_client(settings))

    def get(self, bucket: str, key: str) -> bytes:
        logger.debug("Fetching s3://%s/%s", bucket, key)
        try:
            response = self.client.get_object(Bucket=bucket, Key=key)
            return response["Body"].read()
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            if code in MISSING_KEY_CODES:
                raise ObjectNotFound("Object not found", bucket, key) from exc
            raise StorageFailure(f"Unable to fetch object: {exc}", bucket, key) from exc
        except BotoCoreError as exc:
            raise StorageFailure(f"Unable to fetch object: {exc}", bucket, key) from exc

    def put(self, bucket: str, key: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        logger.debug("Storing %d bytes at s3://%s/%s", len(data), bucket, key)
        try:
            self.client.put_object(Bucket=bucket, Key=key, Body=data, ContentType=content_type)
        except (ClientError, BotoCoreError) as exc:
            raise StorageFailure(f"Unable to store object: {exc}", bucket, key) from exc


@dataclass
class InMemoryObjectStore:
    """Dict-backed store for tests and local dry runs."""

    objects: Dict[Tuple[str, str], bytes] = field(default_factory=dict)
    content_types: Dict[Tuple[str, str], str] = field(default_factory=dict)

    def get(self, bucket: str, key: str) -> bytes:
        try:
            return self.objects[(bucket, key)]
        except KeyError as exc:
            raise ObjectNotFound("Object not found", bucket, key) from exc

    def put(self, bucket: str, key: str, data: bytes, content_type: str = "application/octet-stream") -> None:
        self.objects[(bucket, key)] = bytes(data)
        self.content_types[(bucket, key)] = content_type

    def content_type(self, bucket: str, key: str) -> Optional[str]:
        return self.content_types.get((bucket, key))
