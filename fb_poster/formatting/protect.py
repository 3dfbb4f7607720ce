"""Shield URLs, emails and numbers from substitution rules.

Matches are swapped for placeholder tokens before the rules run and swapped
back afterwards. Scans run in a fixed order (URLs, then emails, then numbers)
over the cumulative working string, so an earlier scan decides which
substrings later scans get to see.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass

from fb_poster.formatting.config import ReplaceOptions

# Compiled patterns keep no match position between calls; sharing them is safe.
_URL_BODY = r"[^\s<>\"{}|\\^`\[\]]"
_URL_TAIL = r"[^\s<>\"{}|\\^`\[\].!?,;:。！？，；：]"
_url_re = re.compile(rf"(?:https?://|ftp://|www\.){_URL_BODY}*{_URL_TAIL}", re.IGNORECASE)

_email_re = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}", re.IGNORECASE)

# 30,000 / 1,234,567 / 3.14 / 99.99% / $1,000.00 / -123,456.78
_number_re = re.compile(r"[$￥€£]?-?[0-9]{1,3}(?:,[0-9]{3})*(?:\.[0-9]+)?%?|[0-9]+\.[0-9]+%?")

# Envelope and index letters all live in the Private Use Area so ordinary rules
# cannot rewrite a placeholder. Rules whose `from` contains U+E000..U+E01F are unsupported.
_PLACEHOLDER_PREFIX = "\ue01e\ue01e"
_PLACEHOLDER_SUFFIX = "\ue01f\ue01f"

_PUA_LETTERS = str.maketrans(
    string.ascii_uppercase,
    "".join(chr(0xE000 + i) for i in range(len(string.ascii_uppercase))),
)


@dataclass(frozen=True)
class ProtectedSegment:
    token: str
    original: str


def index_to_alpha(n: int) -> str:
    """Bijective base-26: 0 -> A, 25 -> Z, 26 -> AA, 27 -> AB."""

    if n < 0:
        raise ValueError("index must be >= 0")
    out = ""
    while True:
        out = chr(ord("A") + n % 26) + out
        n = n // 26 - 1
        if n < 0:
            return out


def placeholder(index: int) -> str:
    return _PLACEHOLDER_PREFIX + index_to_alpha(index).translate(_PUA_LETTERS) + _PLACEHOLDER_SUFFIX


def _shield(text: str, pattern: re.Pattern[str], segments: list[ProtectedSegment]) -> str:
    def _swap(m: re.Match[str]) -> str:
        token = placeholder(len(segments))
        segments.append(ProtectedSegment(token=token, original=m.group(0)))
        return token

    return pattern.sub(_swap, text)


def protect(text: str, options: ReplaceOptions) -> tuple[str, list[ProtectedSegment]]:
    segments: list[ProtectedSegment] = []
    if options.preserve_urls:
        text = _shield(text, _url_re, segments)
    if options.preserve_emails:
        text = _shield(text, _email_re, segments)
    if options.preserve_numbers:
        text = _shield(text, _number_re, segments)
    return text, segments


def restore(text: str, segments: list[ProtectedSegment]) -> str:
    # Plain substring replacement: restored text must never be read as a pattern.
    for seg in segments:
        text = text.replace(seg.token, seg.original)
    return text
