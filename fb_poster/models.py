from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ErrorEnvelope(BaseModel):
    code: str
    message: str


class RuleIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    find: str = Field(default="", alias="from")
    to: str | None = None


class RuleOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    find: str = Field(alias="from")
    to: str | None


class RulesResponse(BaseModel):
    rules: list[RuleOut]


class ValidateRulesRequest(BaseModel):
    # Any shape accepted; a non-list value comes back as a validation error, not a 400.
    rules: Any = None


class ValidateRulesResponse(BaseModel):
    valid: bool
    errors: list[str]


class ConvertOptions(BaseModel):
    text_replace: bool = True
    convert_whitespace: bool = False
    spacing_after_spaces: bool = False
    extra_line_breaks: bool = False
    preserve_urls: bool = False
    preserve_emails: bool = False
    preserve_numbers: bool = False


class ConvertRequest(BaseModel):
    text: str = ""
    rules: list[RuleIn] | None = None
    options: ConvertOptions = Field(default_factory=ConvertOptions)
    copy_to_clipboard: bool = False


class ConvertResponse(BaseModel):
    text: str
    changed: bool
    stats: dict[str, int] = Field(default_factory=dict)
    copy_submitted: bool = False


class StripRequest(BaseModel):
    text: str = ""


class StripResponse(BaseModel):
    text: str
    had_zero_width: bool
