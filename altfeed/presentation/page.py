"""HTML page listing each comic with its caption underneath."""

import html
from typing import List, NamedTuple

from jinja2 import Environment
from markupsafe import Markup

from ..feed import FeedDocument

PAGE_TEMPLATE = """<!doctype html>
<html>
<title>xkcd with subs</title>
<link rel="stylesheet" type="text/css" href="static/style.css">
<link type="application/atom+xml" rel="alternate" href="/atom.xml"/>
</html>
<body>
<h1>xkcd with captions</h1>
<p class="desc">
I am a fan of Randall Munroe's xkcd comic. I read it on a regular basis and
enjoy the mouseover texts that come with the comics, but those can't easily
be read on mobile devices. So this website has an <a href="/atom.xml">RSS
feed</a> which pulls out the text and places it under the image. The feed
links back to <a href="https://xkcd.com">xkcd.com</a>. Enjoy. This page only
shows the latest entries.
</p>
{% for entry in entries %}
<div class="entry">
<h2>{{ entry.title }}</h2>
{{ entry.img }}
<p class="caption">{{ entry.text }}</p>
</div>
{% endfor %}
</body>
"""

_env = Environment(autoescape=True)
_template = _env.from_string(PAGE_TEMPLATE)


class PageEntry(NamedTuple):
    """One comic on the page; img and text are trusted markup."""

    title: str
    img: Markup
    text: Markup


def page_entries(feed: FeedDocument) -> List[PageEntry]:
    """Project feed entries into page entries, in feed order."""
    entries = []
    for entry in feed.entries:
        entries.append(
            PageEntry(
                title=entry.title,
                img=Markup(html.unescape(entry.summary.body)),
                text=Markup(html.unescape(entry.caption())),
            )
        )
    return entries


def render_page(entries: List[PageEntry]) -> str:
    """Render the page for the given entries."""
    return _template.render(entries=entries)
