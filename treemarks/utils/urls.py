"""URL helpers for the bookmark form."""

import re
from typing import Tuple

# Matches http(s)://host.tld style text dropped from outside the tree
URL_PATTERN = re.compile(r"^https?://.+(\..+)+$")


def is_url(text: str) -> bool:
    """Check whether dropped text looks like a navigable URL."""
    return bool(URL_PATTERN.match(text.strip()))


def complete_url(url: str) -> str:
    """Prefix ``http://`` when the URL field has no scheme.

    Empty strings are returned untouched, since an empty URL marks a folder.
    """
    url = url.strip()
    if url and not url.startswith("http"):
        return "http://" + url
    return url


def interpret_text(text: str) -> Tuple[str, str]:
    """Decide which form field dropped text belongs to: ("url"|"title", text)."""
    text = text.strip()
    return ("url" if is_url(text) else "title"), text
