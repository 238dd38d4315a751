"""Display colors for categories and groups."""

from typing import Optional

# Reserved for the Income section; not selectable for groups
INCOME_COLOR = "#16a34a"

UNASSIGNED_COLOR = "#9ca3af"

PALETTE = (
    "#2563eb",  # blue
    "#7c3aed",  # violet
    "#db2777",  # pink
    "#dc2626",  # red
    "#d97706",  # amber
    "#0891b2",  # cyan
)


def _hash_name(name: str) -> int:
    """Base-31 polynomial hash truncated to a signed 32-bit integer."""
    value = 0
    for char in name:
        value = (value * 31 + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


def name_color(name: str) -> str:
    """Deterministic palette color derived from a name."""
    return PALETTE[abs(_hash_name(name)) % len(PALETTE)]


def group_dot_color(group_color: Optional[str], group_name: Optional[str] = None) -> str:
    """Color for a category's group marker.

    Uses the group's stored color, then the name-derived color, and falls back
    to grey for unassigned categories.
    """
    if group_color:
        return group_color
    if group_name:
        return name_color(group_name)
    return UNASSIGNED_COLOR
