"""Colour helpers for bookmark rows.

Colours are stored as lowercase ``#rrggbb`` strings. The UI hands back
either hex strings or CSS ``rgb(r, g, b)`` strings, so both are accepted.
"""

import re
from typing import Sequence, Tuple, Union

DEFAULT_COLOR = "#eeeeee"

# Channel sum below which a colour counts as dark (out of 0-765)
DARK_THRESHOLD = 512

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6}|[0-9a-fA-F]{3})$")
_CHANNEL_RE = re.compile(r"\d{1,3}")

RGB = Tuple[int, int, int]


def to_hex(rgb: Union[str, Sequence[int]]) -> str:
    """Convert an rgb triplet (or a CSS ``rgb()`` string) to ``#rrggbb``.

    Raises:
        ValueError: If there are not exactly three channels in 0-255.
    """
    if isinstance(rgb, str):
        channels = [int(c) for c in _CHANNEL_RE.findall(rgb)]
    else:
        channels = [int(c) for c in rgb]

    if len(channels) != 3:
        raise ValueError(f"Expected three colour channels, got {rgb!r}")
    for c in channels:
        if c < 0 or c > 255:
            raise ValueError(f"Colour channel out of range: {c}")

    return "#" + "".join(f"{c:02x}" for c in channels)


def parse_hex(value: str) -> RGB:
    """Return the (r, g, b) integers of a ``#rrggbb`` or ``#rgb`` string."""
    match = _HEX_RE.match(value.strip())
    if not match:
        raise ValueError(f"Not a hex colour: {value!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(d * 2 for d in digits)
    return (
        int(digits[0:2], 16),
        int(digits[2:4], 16),
        int(digits[4:6], 16),
    )


def normalize_color(value: Union[str, Sequence[int], None]) -> str:
    """Normalize any accepted colour form to lowercase ``#rrggbb``.

    Empty values fall back to the default row colour.
    """
    if value is None or value == "":
        return DEFAULT_COLOR
    if isinstance(value, str) and not value.strip().lower().startswith("rgb"):
        return to_hex(parse_hex(value))
    return to_hex(value)


def is_dark(value: str) -> bool:
    """Coarse darkness test: the channel sum is strictly below 512."""
    return sum(parse_hex(value)) < DARK_THRESHOLD
