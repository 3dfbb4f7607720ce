"""Zero-width padding transforms.

Social platforms collapse runs of spaces and blank lines. Injecting a
zero-width space between the whitespace characters keeps them visible after
posting.
"""

from __future__ import annotations

import re

ZERO_WIDTH_SPACE = "\u200b"

_space_run_re = re.compile(r" {2,}")
_newline_run_re = re.compile(r"\n{2,}")


def _interleave(m: re.Match[str]) -> str:
    return ZERO_WIDTH_SPACE.join(m.group(0))


def convert_whitespace(text: str | None) -> str:
    """Interleave the marker inside runs of 2+ spaces and runs of 2+ newlines.

    A lone space or newline is left alone.
    """

    if not text:
        return ""
    text = _space_run_re.sub(_interleave, text)
    return _newline_run_re.sub(_interleave, text)


def add_spacing_after_spaces(text: str | None) -> str:
    if not text:
        return ""
    return text.replace(" ", " " + ZERO_WIDTH_SPACE)


def add_extra_line_breaks(text: str | None) -> str:
    """Expand every newline into a blank line carrying the marker."""

    if not text:
        return ""
    return text.replace("\n", "\n" + ZERO_WIDTH_SPACE + "\n")


def remove_zero_width_spaces(text: str | None) -> str:
    if not text:
        return ""
    return text.replace(ZERO_WIDTH_SPACE, "")


def has_zero_width_spaces(text: str | None) -> bool:
    if not text:
        return False
    return ZERO_WIDTH_SPACE in text
