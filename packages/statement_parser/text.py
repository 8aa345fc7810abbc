"""Line normalization for decoded statement text."""

from __future__ import annotations


def split_lines(text: str) -> list[str]:
    """Split ``text`` on any line break, trim each line and drop empty ones."""

    return [stripped for line in text.splitlines() if (stripped := line.strip())]


__all__ = ["split_lines"]
