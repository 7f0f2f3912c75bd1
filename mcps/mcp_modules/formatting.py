"""Number rendering shared by the text templates."""
from __future__ import annotations


def format_number(value: object) -> str:
    """Render integral floats without a trailing .0."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
