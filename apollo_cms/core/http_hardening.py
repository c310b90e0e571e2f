from __future__ import annotations

import logging
import re
from time import perf_counter
from uuid import uuid4

from fastapi import FastAPI, Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"
_VALID_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]{1,128}")
access_log = logging.getLogger("apollo_cms.http")

# The API only serves JSON; nothing here is meant to be framed, embedded or cached.
SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Permissions-Policy": "geolocation=(), microphone=(), camera=(), payment=(), usb=()",
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'; base-uri 'none'",
    "Cache-Control": "no-store",
}


def resolve_request_id(raw: str | None) -> str:
    """Reuse a caller-supplied request id when it is safe to echo, else mint one."""
    candidate = str(raw or "").strip()
    return candidate if _VALID_REQUEST_ID.fullmatch(candidate) else uuid4().hex


def decorate_response(response: Response, request_id: str) -> Response:
    response.headers.update(SECURITY_HEADERS)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


def install_http_hardening(app: FastAPI) -> None:
    @app.middleware("http")
    async def _harden(request: Request, call_next):
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id
        started = perf_counter()

        response = decorate_response(await call_next(request), request_id)

        access_log.log(
            logging.WARNING if response.status_code >= 500 else logging.INFO,
            "%s %s status=%s duration_ms=%.2f request_id=%s",
            request.method,
            request.url.path,
            response.status_code,
            (perf_counter() - started) * 1000.0,
            request_id,
        )
        return response
