"""HTTP surface: analyze, mode and health endpoints."""

from __future__ import annotations

import json
import logging
import re
import time
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from vet_pathways import __version__
from vet_pathways.config import AppConfig, load_config, resolve_api_key
from vet_pathways.errors import FieldIssue, ValidationError
from vet_pathways.pipeline.analyzer import MODE_DESCRIPTIONS, Analyzer
from vet_pathways.validation import validate_profile
from vet_pathways.web.rate_limit import InMemoryRateLimiter, RateLimitDecision, client_ip
from vet_pathways.web.security import apply_security_headers

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Failed to analyze profile"

# Error text that may expose provider details or credentials
_SENSITIVE = re.compile(r"api|key|sk-|anthropic|token", re.IGNORECASE)


def _rate_limit_headers(limit: int, decision: RateLimitDecision) -> dict[str, str]:
    return {
        "X-RateLimit-Limit": str(limit),
        "X-RateLimit-Remaining": str(decision.remaining),
        "X-RateLimit-Reset": str(int(decision.reset_time)),
    }


def _bad_request(issues: list[FieldIssue]) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "error": "Invalid request body",
            "details": [issue.to_dict() for issue in issues],
        },
    )


def _too_large(max_body: int, headers: dict[str, str]) -> JSONResponse:
    return JSONResponse(
        status_code=413,
        content={
            "error": "Request too large",
            "message": f"Request body must be smaller than {max_body // 1024}KB",
        },
        headers=headers,
    )


def content_length_exceeds(headers, limit: int) -> bool:
    """Check the declared Content-Length before reading the body."""
    declared = headers.get("content-length")
    if declared is None or not declared.strip().isdigit():
        return False
    return int(declared) > limit


def sanitize_error(exc: Exception) -> str:
    message = str(exc)
    if not message or _SENSITIVE.search(message):
        return GENERIC_ERROR
    return message


def create_app(
    config: AppConfig | None = None,
    analyzer: Analyzer | None = None,
    limiter: InMemoryRateLimiter | None = None,
    api_key: str | None = None,
) -> FastAPI:
    config = config or load_config()
    if analyzer is None:
        analyzer = Analyzer.from_config(config, api_key or resolve_api_key())
    if limiter is None:
        limiter = InMemoryRateLimiter(
            max_requests=config.rate_limit.max_requests,
            window_seconds=config.rate_limit.window_seconds,
        )
    max_body = config.server.max_body_bytes

    app = FastAPI(title="vet-pathways", version=__version__)
    app.state.analyzer = analyzer
    app.state.limiter = limiter

    @app.middleware("http")
    async def log_and_secure(request: Request, call_next):
        start = time.monotonic()
        response = await call_next(request)
        apply_security_headers(response.headers)
        logger.info(
            "%s %s -> %d",
            request.method,
            request.url.path,
            response.status_code,
            extra={
                "method": request.method,
                "path": request.url.path,
                "status": response.status_code,
                "duration_ms": round((time.monotonic() - start) * 1000, 1),
            },
        )
        return response

    @app.post("/api/analyze")
    async def analyze(request: Request):
        ip = client_ip(request.headers)
        decision = limiter.check(ip)
        headers = _rate_limit_headers(limiter.max_requests, decision)

        if not decision.allowed:
            logger.warning("Rate limit exceeded", extra={"client_ip": ip})
            retry_after = decision.retry_after(time.time())
            return JSONResponse(
                status_code=429,
                content={
                    "error": "Rate limit exceeded",
                    "message": f"Too many requests. Please try again in {retry_after} seconds.",
                },
                headers={**headers, "Retry-After": str(retry_after)},
            )

        if content_length_exceeds(request.headers, max_body):
            return _too_large(max_body, headers)
        body = await request.body()
        if len(body) > max_body:
            return _too_large(max_body, headers)

        try:
            raw = json.loads(body)
        except (json.JSONDecodeError, UnicodeDecodeError):
            return _bad_request([FieldIssue("__root__", "Malformed JSON body")])

        try:
            profile = validate_profile(raw)
        except ValidationError as exc:
            logger.info("Rejected invalid profile: %s", ", ".join(exc.fields))
            return _bad_request(exc.issues)

        try:
            result = await analyzer.analyze(profile)
        except Exception as exc:
            logger.error("Error analyzing veteran profile", exc_info=True, extra={"client_ip": ip})
            return JSONResponse(
                status_code=500,
                content={"error": sanitize_error(exc)},
                headers=headers,
            )

        return JSONResponse(content=result.to_wire(), headers=headers)

    @app.get("/api/mode")
    async def mode():
        current = analyzer.mode
        return {"mode": current.value, "description": MODE_DESCRIPTIONS[current]}

    @app.get("/api/health")
    async def health():
        return JSONResponse(
            content={
                "status": "healthy",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "mode": analyzer.mode.value,
                "version": __version__,
            },
            headers={"Cache-Control": "no-cache, no-store, must-revalidate"},
        )

    return app
