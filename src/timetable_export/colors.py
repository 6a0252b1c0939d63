"""Color normalization for timetable cells.

The portal colors class items either through a data attribute ("#ff6b6b")
or an inline style ("background-color: rgb(255, 107, 107)"). Everything is
normalized to lowercase "#rrggbb"; unknown notations yield None so the caller
can apply the configured default.
"""

import re

_RGB_RE = re.compile(
    r"^rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([\d.]+%?)\s*)?\)$",
    re.IGNORECASE,
)

# background-color wins over the background shorthand when both are present
_BACKGROUND_COLOR_RE = re.compile(r"(?:^|;)\s*background-color\s*:\s*([^;]+)", re.IGNORECASE)
_BACKGROUND_RE = re.compile(r"(?:^|;)\s*background\s*:\s*([^;]+)", re.IGNORECASE)
_SHORTHAND_COLOR_RE = re.compile(r"(rgba?\([^)]*\)|#[0-9a-fA-F]{3,8})")


def normalize_color(raw: str | None) -> str | None:
    """Convert a CSS color value to canonical hex.

    Args:
        raw: Color as found in markup, e.g. "rgb(255, 107, 107)" or "#ff6b6b".

    Returns:
        "#rrggbb" for rgb()/rgba() input, the value unchanged if it already
        starts with "#", otherwise None (empty, "transparent", fully transparent
        rgba, named colors and anything unrecognized).
    """
    if raw is None:
        return None
    value = raw.strip()
    if not value or value.lower() == "transparent":
        return None
    if value.startswith("#"):
        return value

    match = _RGB_RE.match(value)
    if not match:
        return None

    alpha = match.group(4)
    if alpha is not None and _is_zero_alpha(alpha):
        return None

    channels = (min(int(match.group(i)), 255) for i in (1, 2, 3))
    return "#" + "".join(f"{c:02x}" for c in channels)


def _is_zero_alpha(alpha: str) -> bool:
    try:
        return float(alpha.rstrip("%")) == 0
    except ValueError:
        return False


def style_background_color(style: str | None) -> str | None:
    """Pull the background color declaration out of an inline style attribute.

    Returns the raw declaration value (not normalized), or None.
    """
    if not style:
        return None
    match = _BACKGROUND_COLOR_RE.search(style)
    if match:
        return match.group(1).replace("!important", "").strip()
    match = _BACKGROUND_RE.search(style)
    if match:
        color = _SHORTHAND_COLOR_RE.search(match.group(1))
        if color:
            return color.group(1)
    return None
