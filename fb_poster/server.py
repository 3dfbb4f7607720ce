"""fb-poster HTTP server.

Run:
  python -m fb_poster.server
Then POST to:
  http://127.0.0.1:18080/api/v1/convert
"""

from __future__ import annotations

import argparse
import sys

import uvicorn

from fb_poster.env import env_int, env_str


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="fb_poster.server", add_help=True)
    parser.add_argument("--host", default=env_str("FB_POSTER_HOST", "127.0.0.1"), help="Bind host (default: 127.0.0.1)")
    parser.add_argument("--port", type=int, default=env_int("FB_POSTER_PORT", 18080), help="Bind port (default: 18080)")
    parser.add_argument("--log-level", default="info", help="uvicorn log level (default: info)")
    parser.add_argument("--reload", action="store_true", help="Auto-reload on code changes (dev only)")

    args = parser.parse_args(argv if argv is not None else sys.argv[1:])

    uvicorn.run(
        "fb_poster.api:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=bool(args.reload),
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
