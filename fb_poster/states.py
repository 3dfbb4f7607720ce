from __future__ import annotations

from enum import StrEnum


class PipelineStep(StrEnum):
    # Declaration order is execution order.
    REPLACE = "replace"
    CONVERT_WHITESPACE = "convert_whitespace"
    SPACING_AFTER_SPACES = "spacing_after_spaces"
    EXTRA_LINE_BREAKS = "extra_line_breaks"


class ClipboardState(StrEnum):
    SKIPPED = "skipped"
    SUBMITTED = "submitted"
    COPIED = "copied"
    FAILED = "failed"
