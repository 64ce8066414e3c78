"""Init command implementation."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from ..config import ConfigModel, default_config_path, save_config

console = Console()


def init_command(
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Where to write the config file",
    ),
    upstream: str = typer.Option(
        "https://xkcd.com/atom.xml", "--upstream", help="Upstream Atom feed URL"
    ),
    timeout: float = typer.Option(30.0, "--timeout", help="Upstream timeout in seconds", min=0.1),
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8080, "--port", help="Bind port", min=1, max=65535),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a default configuration file."""
    if config_path is None:
        config_path = default_config_path()

    if config_path.exists() and not force:
        console.print(f"[yellow]Config already exists: {config_path} (use --force)[/yellow]")
        raise typer.Exit(1)

    config = ConfigModel(
        upstream={"url": upstream, "timeout_seconds": timeout},
        server={"host": host, "port": port},
    )
    save_config(config, config_path)

    console.print(
        Panel(
            f"[green]✅ Created config: {config_path}[/green]\n\n"
            f"Next steps:\n"
            f"1. Run: [bold]altfeed serve[/bold]\n"
            f"2. Open: [bold]http://{host}:{port}/[/bold]",
            style="green",
        )
    )
