"""Caption extraction from summary markup."""

import re

ALT_PATTERN = re.compile(r'alt="([^"]*)"')


def extract_caption(body: str) -> str:
    """Return the value of the first ``alt="..."`` in ``body``, or ``""``.

    This is a plain text scan over the raw, still-escaped body. Only the
    first match counts.
    """
    match = ALT_PATTERN.search(body)
    if match is None:
        return ""
    return match.group(1)
