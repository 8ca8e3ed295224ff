"""Minified-source detection and a small beautifier for display."""

from __future__ import annotations

import re


def detect_minified(content: str) -> bool:
    """Guess whether *content* is minified from its line shape."""
    if not content:
        return False
    lines = content.split("\n")
    avg_line_length = len(content) / len(lines)
    newline_ratio = len(lines) / len(content)
    return avg_line_length > 200 or newline_ratio < 0.002


def format_css(content: str, is_minified: bool = True) -> str:
    """Re-indent minified CSS one declaration per line.

    Non-minified content is returned unchanged.
    """
    if not is_minified:
        return content
    out = content.replace("{", " {\n  ")
    out = out.replace(";", ";\n  ")
    out = out.replace("}", "\n}\n")
    out = re.sub(r",\s*", ",\n", out)
    out = re.sub(r"\n\s*\n", "\n", out)
    return out.strip()
