"""The two pipeline stages, decoupled by the aggregated data artifact."""
from __future__ import annotations

import logging

from genre_recs.catalog.models import AggregationResult
from genre_recs.config import Settings
from genre_recs.pipeline.aggregator import aggregate
from genre_recs.pipeline.artifacts import decode_aggregated, decode_asset_list, encode_aggregated
from genre_recs.prediction.client import GenrePredictor
from genre_recs.report.renderer import render_report
from genre_recs.storage.object_store import ObjectStore

logger = logging.getLogger(__name__)


def process_and_send(
    settings: Settings,
    store: ObjectStore,
    predictor: GenrePredictor,
    max_workers: int = 1,
) -> AggregationResult:
    """Stage A: load assets, predict genres and store the aggregated data.

    Storage and serialization errors propagate; prediction errors only drop
    the affected asset.
    """
    bucket = settings.s3_bucket
    logger.info("Retrieving asset info from s3://%s/%s", bucket, settings.asset_info_key)
    assets = decode_asset_list(store.get(bucket, settings.asset_info_key))
    logger.info("Loaded %d assets", len(assets))

    result = aggregate(assets, predictor, max_workers=max_workers)

    payload = encode_aggregated(result.records)
    logger.info("Uploading aggregated data to s3://%s/%s", bucket, settings.aggregated_data_key)
    store.put(bucket, settings.aggregated_data_key, payload, content_type="application/json")
    return result


def generate_and_upload(settings: Settings, store: ObjectStore) -> str:
    """Stage B: render the stored aggregated data as CSV and upload it.

    Returns the key the report was stored under.
    """
    bucket = settings.s3_bucket
    logger.info("Retrieving aggregated data from s3://%s/%s", bucket, settings.aggregated_data_key)
    records = decode_aggregated(store.get(bucket, settings.aggregated_data_key))

    report = render_report(records)

    report_key = settings.report_key
    logger.info("Uploading report with %d rows to s3://%s/%s", len(records), bucket, report_key)
    store.put(bucket, report_key, report, content_type="text/csv")
    return report_key
