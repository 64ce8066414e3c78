"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .fetch import fetch_command
from .init import init_command
from .serve import serve_command

app = typer.Typer(
    name="altfeed",
    help="altfeed - xkcd feed with the alt text under each comic",
    no_args_is_help=True,
)

# Register commands
app.command("init")(init_command)
app.command("serve")(serve_command)
app.command("fetch")(fetch_command)


if __name__ == "__main__":
    app()
