"""Join catalog assets with their predicted genres."""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Dict, List, Optional, Sequence, Tuple

from genre_recs.catalog.models import AggregatedRecord, AggregationResult, AssetRecord, PredictionFailure
from genre_recs.prediction.client import GenrePredictor, PredictionError

logger = logging.getLogger(__name__)

Outcome = Tuple[Optional[List[str]], Optional[PredictionError]]


def _predict_one(predictor: GenrePredictor, asset: AssetRecord) -> Outcome:
    try:
        return predictor.predict(asset), None
    except PredictionError as exc:
        return None, exc


def _predict_all(predictor: GenrePredictor, assets: Sequence[AssetRecord], max_workers: int) -> List[Outcome]:
    if max_workers <= 1 or len(assets) <= 1:
        return [_predict_one(predictor, asset) for asset in assets]

    outcomes: Dict[int, Outcome] = {}
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        future_map = {
            executor.submit(_predict_one, predictor, asset): index
            for index, asset in enumerate(assets)
        }
        for future in as_completed(future_map):
            outcomes[future_map[future]] = future.result()
    return [outcomes[index] for index in range(len(assets))]


def aggregate(
    assets: Sequence[AssetRecord],
    predictor: GenrePredictor,
    max_workers: int = 1,
) -> AggregationResult:
    """Predict genres for every asset, keeping input order.

    An asset whose prediction fails is left out of ``records`` and reported
    in ``failures``; it never stops the rest of the batch.
    """
    result = AggregationResult()
    for asset, (genres, error) in zip(assets, _predict_all(predictor, assets, max_workers)):
        if error is not None:
            logger.warning("Error predicting genres for asset %s: %s", asset.id, error)
            result.failures.append(
                PredictionFailure(asset_id=asset.id, error_type=type(error).__name__, message=str(error))
            )
            continue
        result.records.append(AggregatedRecord.from_asset(asset, genres or []))

    logger.info(
        "Aggregated %d of %d assets (%d failed)",
        len(result.records),
        len(assets),
        len(result.failures),
    )
    return result
