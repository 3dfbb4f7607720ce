"""Clipboard side effect.

Nothing in the formatting core depends on this; a failed copy is reported
once (log + callback) and never retried.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import pyperclip

from fb_poster import background
from fb_poster.states import ClipboardState

logger = logging.getLogger(__name__)


class ClipboardError(RuntimeError):
    pass


def copy_text(text: str) -> None:
    try:
        pyperclip.copy(text)
    except pyperclip.PyperclipException as e:
        raise ClipboardError(f"clipboard unavailable: {e}") from e


def _copy_and_report(text: str, on_result: Callable[[bool], None] | None) -> None:
    try:
        copy_text(text)
    except ClipboardError as e:
        logger.warning("copy to clipboard failed, copy manually: %s", e)
        if on_result is not None:
            on_result(False)
        return
    logger.info("copied %s chars to clipboard", len(text))
    if on_result is not None:
        on_result(True)


def copy_text_detached(text: str, on_result: Callable[[bool], None] | None = None) -> ClipboardState:
    """Fire-and-forget copy on the background pool."""

    if not text:
        return ClipboardState.SKIPPED
    try:
        background.submit("clipboard", _copy_and_report, text, on_result)
    except RuntimeError as e:
        logger.warning("copy to clipboard failed, copy manually: %s", e)
        if on_result is not None:
            on_result(False)
        return ClipboardState.FAILED
    return ClipboardState.SUBMITTED
