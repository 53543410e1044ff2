"""Structured logging with per-request estimate context.

Every request gets an ``X-Request-ID``.  Estimate endpoints attach what the
calculation actually used (irradiance source, roof segment, yield basis,
chosen size) to the request, and the access line carries it so a surprising
result can be traced back to a fallback without re-running it.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from contextvars import ContextVar
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

ACCESS_LOGGER = "roofyield.access"

# Estimate context recorded on ``request.state.estimate``
ESTIMATE_FIELDS = ("dataset_source", "segment_id", "yield_basis", "kwp", "capped")

_HTTP_FIELDS = ("method", "path", "status_code", "duration_ms", "client_ip")


def annotate_estimate(request: Request, **fields: Any) -> None:
    """Record estimate context for the access log of ``request``.

    Unknown keys are ignored; ``None`` values are dropped.
    """
    context = getattr(request.state, "estimate", None) or {}
    for key, value in fields.items():
        if key in ESTIMATE_FIELDS and value is not None:
            context[key] = value
    request.state.estimate = context


def _describe_estimate(context: dict[str, Any]) -> str:
    parts = []
    if "dataset_source" in context:
        parts.append(f"dataset={context['dataset_source']}")
    if "segment_id" in context:
        parts.append(f"segment={context['segment_id']}")
    if "yield_basis" in context:
        parts.append(f"basis={context['yield_basis']}")
    if "kwp" in context:
        parts.append(f"kwp={context['kwp']:.2f}")
    if context.get("capped"):
        parts.append("capped")
    return " ".join(parts)


class JSONFormatter(logging.Formatter):
    """One JSON object per record, with the request ID and estimate context."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        rid = request_id_var.get("")
        if rid:
            entry["request_id"] = rid

        for key in _HTTP_FIELDS + ESTIMATE_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                entry[key] = val

        if record.exc_info and record.exc_info[1]:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Propagates X-Request-ID and writes one access line per request."""

    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        rid = request.headers.get("x-request-id") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)

        start = time.perf_counter()
        response: Response = await call_next(request)
        duration_ms = round((time.perf_counter() - start) * 1000, 1)
        response.headers["X-Request-ID"] = rid

        estimate = getattr(request.state, "estimate", None) or {}
        summary = _describe_estimate(estimate)
        logging.getLogger(ACCESS_LOGGER).info(
            "%s %s -> %s (%.1fms)%s",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            f" {summary}" if summary else "",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "client_ip": request.client.host if request.client else "unknown",
                **estimate,
            },
        )
        return response


def setup_logging(json_format: bool = False, debug: bool = False) -> None:
    """Configure the root logger; JSON lines in production."""
    handler = logging.StreamHandler()
    if json_format:
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    # The provider clients log every request at INFO
    for noisy in ("httpx", "httpcore", "uvicorn.access"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
