from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from fb_poster.formatting.config import ReplaceOptions
from fb_poster.formatting.protect import protect, restore


@dataclass(frozen=True)
class Rule:
    """Literal find/replace pair.

    `to=""` deletes matches; `to=None` marks the rule as unset and it is skipped.
    """

    find: str
    to: str | None = None

    def to_dict(self) -> dict[str, str | None]:
        return {"from": self.find, "to": self.to}


DEFAULT_RULES: tuple[Rule, ...] = (
    Rule(", ", "，"),  # 英文逗號+空白 -> 中文逗號
    Rule(".", "。"),
    Rule("!", "！"),
    Rule("?", "？"),
    Rule("-", "•"),  # 連字號 -> 項目符號
)

ERR_NOT_A_SEQUENCE = "規則必須是陣列"


@dataclass
class RuleValidation:
    valid: bool
    errors: list[str] = field(default_factory=list)


def _rule_fields(rule: Any) -> tuple[Any, Any]:
    """Read (from, to) off a Rule or a {"from", "to"} mapping."""

    if isinstance(rule, Rule):
        return rule.find, rule.to
    if isinstance(rule, Mapping):
        return rule.get("from"), rule.get("to")
    return None, None


def _is_rule_sequence(rules: Any) -> bool:
    return isinstance(rules, Sequence) and not isinstance(rules, (str, bytes, bytearray))


def _apply_one(text: str, find: str, to: str) -> tuple[str, int]:
    # Escape the needle and insert the replacement via a callable so neither side
    # is interpreted as regex syntax (".", "$", "\\1" stay literal).
    return re.subn(re.escape(find), lambda _m: to, text)


def _run_rules(text: str, rules: Sequence[Any]) -> tuple[str, int]:
    count = 0
    for rule in rules:
        find, to = _rule_fields(rule)
        if not find or to is None:
            continue
        text, n = _apply_one(text, str(find), str(to))
        count += n
    return text, count


def apply_rules(
    text: str | None,
    rules: Sequence[Any] | None,
    options: ReplaceOptions | None = None,
) -> tuple[str | None, int]:
    """Apply `rules` in order and return (text, number_of_substitutions).

    Each rule sees the output of the previous one. Rules with an empty `from`
    or an unset `to` are skipped rather than failing the batch.
    """

    if not text or not rules:
        return text, 0

    options = options or ReplaceOptions()
    if not options.any_enabled:
        return _run_rules(text, rules)

    shielded, segments = protect(text, options)
    out, count = _run_rules(shielded, rules)
    return restore(out, segments), count


def replace_text(
    text: str | None,
    rules: Sequence[Any] | None,
    options: ReplaceOptions | None = None,
) -> str | None:
    out, _ = apply_rules(text, rules, options)
    return out


def validate_rules(rules: Any) -> RuleValidation:
    if not _is_rule_sequence(rules):
        return RuleValidation(valid=False, errors=[ERR_NOT_A_SEQUENCE])

    errors: list[str] = []
    for i, rule in enumerate(rules, start=1):
        find, to = _rule_fields(rule)
        if not find:
            errors.append(f'規則 {i}: 缺少 "from" 欄位')
        if to is None:
            errors.append(f'規則 {i}: 缺少 "to" 欄位')

    return RuleValidation(valid=not errors, errors=errors)
