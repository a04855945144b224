"""Colour helpers for calendar activities."""
from lunarium.services.constants import DEFAULT_ACTIVITY_COLOR, GOOGLE_COLORS


def text_color_for_background(hex_color: str) -> str:
    """
    Pick black or white text for a background colour.

    Uses YIQ perceived brightness.

    Example:
        >>> text_color_for_background("#fdfb93")
        '#000000'
        >>> text_color_for_background("#882c45")
        '#ffffff'
    """
    value = hex_color.lstrip("#")
    r = int(value[0:2], 16)
    g = int(value[2:4], 16)
    b = int(value[4:6], 16)

    yiq = (r * 299 + g * 587 + b * 114) / 1000
    return "#000000" if yiq >= 128 else "#ffffff"


def google_color(color_id) -> str:
    """Map a Google Calendar colour id (1-11) to hex."""
    return GOOGLE_COLORS.get(str(color_id), DEFAULT_ACTIVITY_COLOR)
