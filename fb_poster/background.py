from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from fb_poster.env import env_int

logger = logging.getLogger(__name__)

_lock = threading.Lock()
_executor: ThreadPoolExecutor | None = None


def _get_executor() -> ThreadPoolExecutor:
    # Created lazily so an app restarted in the same process gets a fresh pool.
    global _executor
    with _lock:
        if _executor is None:
            _executor = ThreadPoolExecutor(
                max_workers=max(1, env_int("FB_POSTER_BG_MAX_WORKERS", 2)),
                thread_name_prefix="fb-poster-bg",
            )
        return _executor


def submit(task_name: str, fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> None:
    """Run `fn` on the bounded background pool and forget about it.

    The Future is not handed back. Crashes are logged; callers that care about
    the outcome report it themselves from inside `fn`.
    """

    name = str(task_name or "").strip()
    if not name:
        raise ValueError("task_name is required")

    fut = _get_executor().submit(fn, *args, **kwargs)

    def _done(f: Future) -> None:
        try:
            f.result()
        except Exception:
            logger.exception("background task crashed: task=%s", name)

    fut.add_done_callback(_done)


def shutdown(*, wait: bool = False) -> None:
    global _executor
    with _lock:
        ex, _executor = _executor, None
    if ex is not None:
        ex.shutdown(wait=wait, cancel_futures=not wait)
