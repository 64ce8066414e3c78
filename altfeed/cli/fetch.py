"""Fetch command implementation."""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from ..config import Config
from ..errors import FeedError, SerializeError
from ..pipeline import FeedSource
from ..presentation import page_entries, render_page, republish

console = Console(stderr=True)


def fetch_command(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
    as_html: bool = typer.Option(False, "--html", help="Print the HTML page instead of the feed"),
) -> None:
    """Fetch the feed once and print it to stdout."""
    try:
        config = Config(config_path).config
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    try:
        feed = FeedSource.from_config(config).get_feed_sync()
        if as_html:
            sys.stdout.write(render_page(page_entries(feed)))
        else:
            sys.stdout.buffer.write(republish(feed))
            sys.stdout.flush()
    except SerializeError as e:
        console.print(f"[red]failed to marshal feed: {e}[/red]")
        raise typer.Exit(1)
    except FeedError as e:
        console.print(f"[red]failed to get upstream atom: {e}[/red]")
        raise typer.Exit(1)
