"""Utility functions for Bohr.

This module contains small helpers shared across the package.

Key functions:
    format_number: Format floats compactly for SVG attributes.
    normalize_selector: Turn a container selector into an element id.
    slugify: Convert text to a filename-friendly slug.
    ensure_parent_dir: Create the parent directory of an output file.
"""

from __future__ import annotations

import re
from pathlib import Path

SELECTOR_RE = re.compile(r"^#?([A-Za-z][A-Za-z0-9_\-:.]*)$")


def format_number(value: float, precision: int = 3) -> str:
    """Format a number for SVG output without trailing zeros.

    Args:
        value: Number to format.
        precision: Maximum digits after the decimal point.

    Returns:
        Compact string representation.

    Examples:
        >>> format_number(30.0)
        '30'

        >>> format_number(1.23456)
        '1.235'
    """
    text = f"{value:.{precision}f}".rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def normalize_selector(selector: str) -> str:
    """Return the element id named by a container selector.

    Only id selectors are supported; the leading ``#`` is optional.

    Args:
        selector: Selector such as ``#atom`` or ``atom``.

    Returns:
        The bare id (``atom``).

    Raises:
        ValueError: If the selector is not a simple id selector.
    """
    match = SELECTOR_RE.match(selector.strip()) if selector else None
    if not match:
        raise ValueError(f"Unsupported container selector: {selector!r}")
    return match.group(1)


def slugify(text: str) -> str:
    """Convert text to a lowercase, hyphen-separated slug.

    Args:
        text: Text to convert.

    Returns:
        URL and filename friendly slug.
    """
    cleaned = re.sub(r"[^a-zA-Z0-9]+", "-", text)
    cleaned = cleaned.strip("-").lower()
    return cleaned or "diagram"


def ensure_parent_dir(path: Path) -> None:
    """Ensure the directory that will hold ``path`` exists."""
    path.parent.mkdir(parents=True, exist_ok=True)
