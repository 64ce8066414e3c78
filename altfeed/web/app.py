"""HTTP surface: the republished feed and the HTML page."""

from typing import Optional

from fastapi import APIRouter, FastAPI, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response
from jinja2 import TemplateError
from rich.console import Console

from .. import __version__
from ..config import ConfigModel
from ..errors import FeedError, SerializeError
from ..pipeline import FeedSource
from ..presentation import ATOM_CONTENT_TYPE, page_entries, render_page, republish

console = Console(stderr=True)


def _get_feed_source(request: Request) -> FeedSource:
    source = getattr(request.app.state, "feed_source", None)
    if not isinstance(source, FeedSource):
        raise RuntimeError("feed_source not configured")
    return source


def _upstream_failure(e: FeedError) -> PlainTextResponse:
    console.print(f"[red]failed to get upstream atom: {e}[/red]")
    return PlainTextResponse(f"failed to get upstream atom: {e}", status_code=500)


def build_router() -> APIRouter:
    """Create the router with the feed and page routes."""
    router = APIRouter()

    @router.get("/atom.xml")
    async def atom(request: Request) -> Response:
        try:
            feed = await _get_feed_source(request).get_feed()
        except FeedError as e:
            return _upstream_failure(e)
        try:
            body = republish(feed)
        except SerializeError as e:
            console.print(f"[red]{e}[/red]")
            return PlainTextResponse("failed to marshal feed", status_code=500)
        return Response(content=body, media_type=ATOM_CONTENT_TYPE)

    @router.get("/", response_class=HTMLResponse)
    async def index(request: Request) -> Response:
        try:
            feed = await _get_feed_source(request).get_feed()
        except FeedError as e:
            return _upstream_failure(e)
        try:
            page = render_page(page_entries(feed))
        except TemplateError as e:
            console.print(f"[red]failed to execute template: {e}[/red]")
            return PlainTextResponse("failed to execute template", status_code=500)
        return HTMLResponse(page)

    return router


def create_app(config: Optional[ConfigModel] = None, source: Optional[FeedSource] = None) -> FastAPI:
    """Compose the application.

    Args:
        config: Loaded configuration, defaults when omitted
        source: Feed source to serve from; built from config when omitted

    Returns:
        FastAPI application with routes registered
    """
    if config is None:
        config = ConfigModel()
    if source is None:
        source = FeedSource.from_config(config)

    app = FastAPI(title="altfeed", version=__version__)
    app.state.feed_source = source
    app.include_router(build_router())
    return app
