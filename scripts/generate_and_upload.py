"""Stage B: render the aggregated data as a CSV report and upload it."""
from __future__ import annotations

import logging

import typer

from genre_recs.config import configure_logging, get_settings
from genre_recs.pipeline.artifacts import SerializationFailure
from genre_recs.pipeline.stages import generate_and_upload
from genre_recs.storage.object_store import S3ObjectStore, StorageFailure

app = typer.Typer(help="Generate the recommendations CSV and upload it to object storage")


@app.command()
def run(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging")) -> None:
    """Run the generate-and-upload stage."""
    configure_logging(verbose)
    settings = get_settings()
    store = S3ObjectStore.from_settings(settings)

    try:
        report_key = generate_and_upload(settings, store)
    except (StorageFailure, SerializationFailure) as exc:
        logging.error("Generate-and-upload failed: %s", exc)
        raise typer.Exit(code=1) from exc

    typer.secho(f"Recommendations CSV uploaded to s3://{settings.s3_bucket}/{report_key}", fg=typer.colors.GREEN)


if __name__ == "__main__":  # pragma: no cover
    app()
