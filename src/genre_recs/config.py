"""Application configuration utilities."""
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Centralized configuration loaded from environment or .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    aws_region: str = Field(default="us-east-1", alias="AWS_REGION")
    s3_bucket: str = Field(default="genre-recommendations", alias="S3_BUCKET")
    s3_endpoint_url: Optional[str] = Field(default=None, alias="S3_ENDPOINT_URL")
    asset_info_key: str = Field(default="assets/asset_info.json", alias="ASSET_INFO_KEY")
    aggregated_data_key: str = Field(default="aggregated_data.json", alias="AGGREGATED_DATA_KEY")
    recommendations_key: str = Field(default="recommendations/", alias="RECOMMENDATIONS_KEY")
    report_filename: str = Field(default="recommendations.csv", alias="REPORT_FILENAME")
    ds_service_url: str = Field(default="http://localhost:8080/predict", alias="DS_SERVICE_URL")
    request_timeout: float = Field(default=30.0, alias="DS_REQUEST_TIMEOUT")
    ds_port: int = Field(default=9090, alias="DS_PORT")

    @property
    def report_key(self) -> str:
        """Object key of the final report; the recommendations key is a prefix."""
        return f"{self.recommendations_key}{self.report_filename}"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()


def configure_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(message)s")
