from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from fb_poster.formatting.config import PipelineConfig
from fb_poster.formatting.rules import DEFAULT_RULES, apply_rules
from fb_poster.formatting.whitespace import (
    ZERO_WIDTH_SPACE,
    add_extra_line_breaks,
    add_spacing_after_spaces,
    convert_whitespace,
)
from fb_poster.states import PipelineStep


@dataclass
class FormatResult:
    text: str
    stats: dict[str, int] = field(default_factory=dict)

    def changed(self, original: str | None) -> bool:
        return self.text != (original or "")


_PADDING: dict[PipelineStep, Callable[[str], str]] = {
    PipelineStep.CONVERT_WHITESPACE: convert_whitespace,
    PipelineStep.SPACING_AFTER_SPACES: add_spacing_after_spaces,
    PipelineStep.EXTRA_LINE_BREAKS: add_extra_line_breaks,
}


def _enabled_steps(config: PipelineConfig) -> list[PipelineStep]:
    flags = {
        PipelineStep.REPLACE: config.text_replace,
        PipelineStep.CONVERT_WHITESPACE: config.convert_whitespace,
        PipelineStep.SPACING_AFTER_SPACES: config.spacing_after_spaces,
        PipelineStep.EXTRA_LINE_BREAKS: config.extra_line_breaks,
    }
    return [step for step in PipelineStep if flags[step]]


def format_text(
    text: str | None,
    config: PipelineConfig | None = None,
    rules: Sequence[Any] | None = None,
) -> FormatResult:
    """Run rule substitution, then the enabled padding transforms.

    Steps always run in `PipelineStep` order regardless of how the flags were
    set. `rules=None` means the built-in default rule set.
    """

    if not text:
        return FormatResult(text="")

    config = config or PipelineConfig()
    if rules is None:
        rules = DEFAULT_RULES

    stats: dict[str, int] = {}
    for step in _enabled_steps(config):
        if step is PipelineStep.REPLACE:
            out, n = apply_rules(text, rules, config.replace_options)
            text = out or ""
        else:
            before = text.count(ZERO_WIDTH_SPACE)
            text = _PADDING[step](text)
            n = text.count(ZERO_WIDTH_SPACE) - before
        if n:
            stats[str(step)] = stats.get(str(step), 0) + n

    return FormatResult(text=text, stats=stats)
