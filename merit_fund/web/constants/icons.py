"""
Constants and helpers for the goal icon set.
"""
from typing import Dict, List

# Order matters: the first icon is the default for a new goal
ICONS: List[str] = ['my_icon1', 'my_icon2', 'my_icon3']

DEFAULT_ICON = ICONS[0]

# Glyphs shown in place of the artwork when no image asset is installed
ICON_GLYPHS: Dict[str, str] = {
    'my_icon1': '🪷',
    'my_icon2': '🏮',
    'my_icon3': '🪙',
}


def is_valid_icon(icon_name: str) -> bool:
    """Check whether an icon name belongs to the fixed icon set."""
    return icon_name in ICONS


def normalize_icon(icon_name: str) -> str:
    """Return the icon name if known, otherwise the default icon."""
    return icon_name if is_valid_icon(icon_name) else DEFAULT_ICON


def get_icon_glyph(icon_name: str) -> str:
    """Get the display glyph for an icon, falling back to the default icon's glyph."""
    return ICON_GLYPHS.get(icon_name, ICON_GLYPHS[DEFAULT_ICON])
