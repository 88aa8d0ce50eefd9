"""Serve random genre predictions locally for end-to-end runs."""
from __future__ import annotations

import typer

from genre_recs.config import configure_logging, get_settings
from genre_recs.prediction.mock_service import create_app

app = typer.Typer(help="Run the mock genre prediction service")


@app.command()
def serve(
    port: int = typer.Option(None, help="Port to listen on (defaults to DS_PORT)"),
    host: str = typer.Option("127.0.0.1", help="Interface to bind"),
) -> None:
    """Start the mock service."""
    configure_logging()
    port = port or get_settings().ds_port
    typer.secho(f"Mock prediction service running on port {port}", fg=typer.colors.GREEN)
    create_app().run(host=host, port=port)


if __name__ == "__main__":  # pragma: no cover
    app()
