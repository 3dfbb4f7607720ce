from __future__ import annotations

import pytest

from fb_poster.formatting.config import ReplaceOptions
from fb_poster.formatting.protect import index_to_alpha, placeholder, protect, restore
from fb_poster.formatting.rules import Rule, replace_text


@pytest.mark.parametrize(
    ("n", "expected"),
    [(0, "A"), (1, "B"), (25, "Z"), (26, "AA"), (27, "AB"), (701, "ZZ"), (702, "AAA")],
)
def test_index_to_alpha(n: int, expected: str) -> None:
    assert index_to_alpha(n) == expected


def test_index_to_alpha_rejects_negative() -> None:
    with pytest.raises(ValueError):
        index_to_alpha(-1)


def test_placeholders_are_unique_and_free_of_ordinary_text() -> None:
    tokens = [placeholder(i) for i in range(200)]
    assert len(set(tokens)) == len(tokens)
    for tok in tokens:
        assert not any(ch.isascii() and (ch.isalnum() or ch in ".,!?-_%$") for ch in tok)
        assert all("\ue000" <= ch <= "\ue01f" for ch in tok)


def test_protect_no_options_is_noop() -> None:
    text, segments = protect("https://example.com 1,000", ReplaceOptions())
    assert text == "https://example.com 1,000"
    assert segments == []


def test_protect_records_segments_in_scan_order() -> None:
    text = "Mail a@b.org, see https://x.com/v1.2 and pay 3.5."
    opts = ReplaceOptions(preserve_urls=True, preserve_emails=True, preserve_numbers=True)
    shielded, segments = protect(text, opts)

    # URLs are scanned first, so the "1.2" inside the URL belongs to the URL segment.
    assert [s.original for s in segments] == ["https://x.com/v1.2", "a@b.org", "3.5"]
    assert [s.token for s in segments] == [placeholder(0), placeholder(1), placeholder(2)]
    assert "https" not in shielded
    assert "@" not in shielded
    assert shielded.endswith(placeholder(2) + ".")
    assert restore(shielded, segments) == text


def test_url_excludes_trailing_fullwidth_punctuation() -> None:
    shielded, segments = protect("看 https://example.com。 好", ReplaceOptions(preserve_urls=True))
    assert segments[0].original == "https://example.com"
    assert shielded.endswith("。 好")

    shielded, segments = protect("看 https://example.com。", ReplaceOptions(preserve_urls=True))
    assert segments[0].original == "https://example.com"
    assert shielded.endswith("。")


def test_url_keeps_fullwidth_punctuation_followed_by_body_chars() -> None:
    # Only a trailing run is dropped; with no whitespace after it, "。好" is still body.
    _, segments = protect("看 https://example.com。好", ReplaceOptions(preserve_urls=True))
    assert segments[0].original == "https://example.com。好"


def test_control_char_rules_cannot_corrupt_placeholders() -> None:
    opts = ReplaceOptions(preserve_urls=True, preserve_emails=True, preserve_numbers=True)
    text = "Go www.example.com, mail a@b.org, pay 3.5."
    rules = [Rule("\x00", ""), Rule("\x01", "x"), Rule(".", "。")]
    assert replace_text(text, rules, opts) == "Go www.example.com, mail a@b.org, pay 3.5。"
    assert "\x00" not in placeholder(0) and "\x01" not in placeholder(0)



def test_url_scheme_is_case_insensitive_and_stops_at_brackets() -> None:
    _, segments = protect('Go <WWW.Example.COM> or "HTTP://a.io/x"', ReplaceOptions(preserve_urls=True))
    assert [s.original for s in segments] == ["WWW.Example.COM", "HTTP://a.io/x"]


@pytest.mark.parametrize(
    "number",
    ["30,000", "1,234,567", "3.14", "99.99%", "$1,000.00", "-123,456.78", "€5", "£12.5", "￥300"],
)
def test_number_shapes(number: str) -> None:
    _, segments = protect(f"value {number} here", ReplaceOptions(preserve_numbers=True))
    assert [s.original for s in segments] == [number]


def test_restore_is_literal() -> None:
    _, segments = protect("see www.a.com/$&x", ReplaceOptions(preserve_urls=True))
    assert restore(placeholder(0) + "!", segments) == "www.a.com/$&x!"
