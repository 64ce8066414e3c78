"""Serve command implementation."""

from pathlib import Path
from typing import Optional

import typer
import uvicorn
from rich.console import Console

from ..config import Config
from ..web import create_app

console = Console()


def serve_command(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
) -> None:
    """Serve /atom.xml and the HTML page."""
    try:
        config = Config(config_path).config
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if host is None:
        host = config.server.host
    if port is None:
        port = config.server.port

    console.print(f"[bold]Serving {config.upstream.url} on http://{host}:{port}/[/bold]")
    uvicorn.run(create_app(config), host=host, port=port)
