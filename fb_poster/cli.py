"""Convert text from a file or stdin and print the result.

  python -m fb_poster.cli post.txt --whitespace --preserve-urls --copy
  pbpaste | python -m fb_poster.cli --rules my_rules.json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import threading
from pathlib import Path
from typing import TextIO

from fb_poster.clipboard import copy_text_detached
from fb_poster.formatting.config import PipelineConfig, ReplaceOptions
from fb_poster.formatting.pipeline import format_text
from fb_poster.formatting.rules import validate_rules
from fb_poster.formatting.whitespace import remove_zero_width_spaces
from fb_poster.logging_setup import configure_console_logging
from fb_poster.states import ClipboardState

logger = logging.getLogger(__name__)

COPY_WAIT_SECONDS = 5.0


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fb_poster.cli", description="Format text for social-media posting.")
    p.add_argument("file", nargs="?", help="Input text file (default: stdin)")
    p.add_argument("--rules", help="JSON file with a list of {\"from\", \"to\"} rules (default: built-in rules)")
    p.add_argument("--no-replace", action="store_true", help="Skip rule substitution")
    p.add_argument("--whitespace", action="store_true", help="Pad runs of spaces/newlines with zero-width spaces")
    p.add_argument("--spacing", action="store_true", help="Add a zero-width space after every space")
    p.add_argument("--line-breaks", action="store_true", help="Turn every newline into a padded blank line")
    p.add_argument("--preserve-urls", action="store_true")
    p.add_argument("--preserve-emails", action="store_true")
    p.add_argument("--preserve-numbers", action="store_true")
    p.add_argument("--strip", action="store_true", help="Only remove zero-width spaces")
    p.add_argument("--copy", action="store_true", help="Also copy the result to the clipboard")
    p.add_argument("--log-level", default="warning")
    return p


def _read_input(path: str | None, stdin: TextIO) -> str:
    if path:
        return Path(path).read_text(encoding="utf-8")
    return stdin.read()


def _load_rules(path: str) -> list:
    return json.loads(Path(path).read_text(encoding="utf-8"))


def _copy_and_wait(text: str) -> ClipboardState:
    done = threading.Event()
    outcome: list[bool] = []

    def _on_result(ok: bool) -> None:
        outcome.append(ok)
        done.set()

    state = copy_text_detached(text, on_result=_on_result)
    if state is not ClipboardState.SUBMITTED:
        return state
    if not done.wait(COPY_WAIT_SECONDS):
        logger.warning("clipboard copy still pending after %ss", COPY_WAIT_SECONDS)
        return ClipboardState.SUBMITTED
    return ClipboardState.COPIED if outcome and outcome[0] else ClipboardState.FAILED


def main(argv: list[str] | None = None, *, stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    args = _build_parser().parse_args(argv if argv is not None else sys.argv[1:])
    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout
    configure_console_logging(args.log_level)

    try:
        text = _read_input(args.file, stdin)
    except OSError as e:
        print(f"error: cannot read input: {e}", file=sys.stderr)
        return 2

    rules = None
    if args.rules:
        try:
            rules = _load_rules(args.rules)
        except (OSError, ValueError) as e:
            print(f"error: cannot load rules: {e}", file=sys.stderr)
            return 2
        check = validate_rules(rules)
        if not check.valid:
            for err in check.errors:
                print(err, file=sys.stderr)
            return 2

    if args.strip:
        out = remove_zero_width_spaces(text)
    else:
        cfg = PipelineConfig(
            text_replace=not args.no_replace,
            replace_options=ReplaceOptions(
                preserve_urls=args.preserve_urls,
                preserve_emails=args.preserve_emails,
                preserve_numbers=args.preserve_numbers,
            ),
            convert_whitespace=args.whitespace,
            spacing_after_spaces=args.spacing,
            extra_line_breaks=args.line_breaks,
        )
        result = format_text(text, cfg, rules=rules)
        logger.info("stats: %s", result.stats)
        out = result.text

    stdout.write(out)

    if args.copy and out and out != text:
        state = _copy_and_wait(out)
        if state is ClipboardState.FAILED:
            print("copy failed, please copy manually", file=sys.stderr)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
