from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ReplaceOptions:
    # Withhold these substrings from substitution rules; restored verbatim afterwards.
    preserve_urls: bool = False
    preserve_emails: bool = False
    preserve_numbers: bool = False

    @property
    def any_enabled(self) -> bool:
        return self.preserve_urls or self.preserve_emails or self.preserve_numbers


@dataclass(frozen=True)
class PipelineConfig:
    # Rule substitution (default rule set unless the caller passes one).
    text_replace: bool = True
    replace_options: ReplaceOptions = field(default_factory=ReplaceOptions)

    # Zero-width padding; off by default since it changes what gets pasted.
    convert_whitespace: bool = False
    spacing_after_spaces: bool = False
    extra_line_breaks: bool = False
