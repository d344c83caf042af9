#!/usr/bin/env python3
"""Start the lockparse web application."""

import typer
import uvicorn


def main(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind"),
    port: int = typer.Option(8000, "--port", help="Port to listen on"),
    reload: bool = typer.Option(False, "--reload", help="Restart on source changes (development)"),
) -> None:
    """Serve the lockparse API with uvicorn."""
    typer.echo(f"Serving lockparse API on http://{host}:{port} (docs at /docs)")

    uvicorn.run(
        "apps.web.main:app",
        host=host,
        port=port,
        reload=reload,
        reload_dirs=["apps", "lockparse"] if reload else None,
    )


if __name__ == "__main__":
    typer.run(main)
