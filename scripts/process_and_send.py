"""Stage A: predict genres for the asset catalog and store the aggregated data."""
from __future__ import annotations

import logging

import typer

from genre_recs.config import configure_logging, get_settings
from genre_recs.pipeline.artifacts import SerializationFailure
from genre_recs.pipeline.stages import process_and_send
from genre_recs.prediction.client import GenrePredictionClient
from genre_recs.storage.object_store import S3ObjectStore, StorageFailure

app = typer.Typer(help="Predict genres for catalog assets and store the aggregated data")


@app.command()
def run(
    workers: int = typer.Option(1, min=1, help="Concurrent prediction requests"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Run the process-and-send stage."""
    configure_logging(verbose)
    settings = get_settings()
    store = S3ObjectStore.from_settings(settings)
    client = GenrePredictionClient(settings.ds_service_url, timeout=settings.request_timeout)

    try:
        result = process_and_send(settings, store, client, max_workers=workers)
    except (StorageFailure, SerializationFailure) as exc:
        logging.error("Process-and-send failed: %s", exc)
        raise typer.Exit(code=1) from exc

    if result.failures:
        typer.secho(f"{len(result.failures)} assets skipped after prediction errors.", fg=typer.colors.YELLOW)
    typer.secho(
        f"Processed {len(result.records)} assets and stored aggregated data successfully.",
        fg=typer.colors.GREEN,
    )


if __name__ == "__main__":  # pragma: no cover
    app()
