from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Body, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from fb_poster.background import shutdown as shutdown_background
from fb_poster.clipboard import copy_text_detached
from fb_poster.env import env_str
from fb_poster.formatting.config import PipelineConfig, ReplaceOptions
from fb_poster.formatting.pipeline import format_text
from fb_poster.formatting.rules import DEFAULT_RULES, Rule, validate_rules
from fb_poster.formatting.whitespace import has_zero_width_spaces, remove_zero_width_spaces
from fb_poster.logging_setup import ensure_file_logging
from fb_poster.models import (
    ConvertOptions,
    ConvertRequest,
    ConvertResponse,
    ErrorEnvelope,
    RuleIn,
    RuleOut,
    RulesResponse,
    StripRequest,
    StripResponse,
    ValidateRulesRequest,
    ValidateRulesResponse,
)
from fb_poster.states import ClipboardState

logger = logging.getLogger(__name__)

def _log_dir() -> Path:
    # Relative to the launch directory; the package itself may sit in site-packages.
    return Path(env_str("FB_POSTER_LOG_DIR", "logs")).expanduser().resolve()


def _error_code_for_status(status_code: int) -> str:
    if status_code == 404:
        return "not_found"
    if status_code == 409:
        return "conflict"
    if status_code in {400, 413, 422}:
        return "bad_request"
    return "internal_error"


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": ErrorEnvelope(code=_error_code_for_status(status_code), message=message).model_dump()},
    )


def _pipeline_from_options(opts: ConvertOptions) -> PipelineConfig:
    return PipelineConfig(
        text_replace=opts.text_replace,
        replace_options=ReplaceOptions(
            preserve_urls=opts.preserve_urls,
            preserve_emails=opts.preserve_emails,
            preserve_numbers=opts.preserve_numbers,
        ),
        convert_whitespace=opts.convert_whitespace,
        spacing_after_spaces=opts.spacing_after_spaces,
        extra_line_breaks=opts.extra_line_breaks,
    )


def _rules_from_request(rules: list[RuleIn] | None) -> list[Rule] | None:
    if rules is None:
        return None
    return [Rule(r.find, r.to) for r in rules]


@asynccontextmanager
async def _lifespan(_app: FastAPI) -> AsyncIterator[None]:
    log_file = ensure_file_logging(log_dir=_log_dir())
    logger.info("file logging enabled: %s", log_file)

    yield

    shutdown_background(wait=False)


app = FastAPI(lifespan=_lifespan)


@app.exception_handler(StarletteHTTPException)
async def _http_exception_handler(_request: Request, exc: StarletteHTTPException):
    return _error(int(exc.status_code), str(exc.detail))


@app.exception_handler(RequestValidationError)
async def _validation_exception_handler(_request: Request, exc: RequestValidationError):
    msg = "bad request"
    errors = exc.errors()
    if errors:
        msg = errors[0].get("msg") or msg
    return _error(400, msg)


@app.exception_handler(Exception)
async def _unhandled_exception_handler(_request: Request, exc: Exception):
    logger.exception("unhandled error")
    return _error(500, str(exc))


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.get("/api/v1/rules/default", response_model=RulesResponse)
async def get_default_rules():
    return RulesResponse(rules=[RuleOut(find=r.find, to=r.to) for r in DEFAULT_RULES])


@app.post("/api/v1/rules/validate", response_model=ValidateRulesResponse)
async def post_validate_rules(body: ValidateRulesRequest = Body(...)):
    result = validate_rules(body.rules)
    return ValidateRulesResponse(valid=result.valid, errors=result.errors)


@app.post("/api/v1/convert", response_model=ConvertResponse)
async def convert(body: ConvertRequest = Body(...)):
    cfg = _pipeline_from_options(body.options)
    result = format_text(body.text, cfg, rules=_rules_from_request(body.rules))
    changed = result.changed(body.text)

    copy_submitted = False
    if body.copy_to_clipboard and changed:
        copy_submitted = copy_text_detached(result.text) is ClipboardState.SUBMITTED

    logger.info("convert: in=%s out=%s stats=%s", len(body.text), len(result.text), result.stats)
    return ConvertResponse(text=result.text, changed=changed, stats=result.stats, copy_submitted=copy_submitted)


@app.post("/api/v1/zero-width/strip", response_model=StripResponse)
async def strip_zero_width(body: StripRequest = Body(...)):
    return StripResponse(
        text=remove_zero_width_spaces(body.text),
        had_zero_width=has_zero_width_spaces(body.text),
    )
