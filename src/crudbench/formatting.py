"""Shared text formatting helpers for crudbench.

Rounding: every helper here relies on Python's ``format()`` rounding,
which rounds the exact binary value of the float and sends exact ties
to the even digit.  ``format_duration(1125)`` is therefore ``"1.12s"``
and ``format_duration(2.5)`` is ``"2ms"``.
"""

from __future__ import annotations


def format_duration(ms: float) -> str:
    """Format a duration given in milliseconds.

    Values of at least one second render as seconds with two decimals
    (``'1.50s'``); smaller values render as whole milliseconds
    (``'843ms'``).  The unit is picked from the unrounded value, so
    ``999.5`` gives ``'1000ms'``.
    """
    if ms >= 1000:
        return f"{ms / 1000:.2f}s"
    return f"{ms:.0f}ms"


def format_ratio(ratio: float) -> str:
    """Format a multiplier: ``'14.3x'``."""
    return f"{ratio:.1f}x"


def format_percent(fraction: float, precision: int = 1) -> str:
    """Format a fraction as a percentage: ``0.125`` gives ``'12.5%'``."""
    return f"{fraction * 100:.{precision}f}%"


def format_section_header(title: str, width: int = 60) -> str:
    """Format a section header: ``'─── Title ──...'``."""
    prefix = "\u2500\u2500\u2500 "
    suffix_len = width - len(prefix) - len(title) - 1
    suffix = " " + "\u2500" * max(0, suffix_len)
    return prefix + title + suffix


def truncate(text: str, max_len: int, suffix: str = "...") -> str:
    """Truncate text to *max_len*, adding *suffix* if truncated."""
    if len(text) <= max_len:
        return text
    if max_len <= len(suffix):
        return suffix[:max_len]
    return text[: max_len - len(suffix)] + suffix
