"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, g, jsonify, request

from hobbyconnect.core.auth import get_auth
from hobbyconnect.core.errors import Unauthorized
from hobbyconnect.schemas.common import PaginationQuerySchema
from hobbyconnect.services._shared.dto import PaginationIn
from hobbyconnect.services._shared.errors import InvalidTokenError

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)


def parse_pagination(default_limit: int = 10, max_limit: int = 100) -> PaginationIn:
    """Parse pagination parameters from ``request.args`` using Marshmallow."""

    schema = PaginationQuerySchema(default_limit=default_limit, max_limit=max_limit)
    data = schema.load(request.args)
    return PaginationIn(page=data["page"], limit=data["limit"], sort=data["sort"])


def load_json(schema: Any) -> dict[str, Any]:
    """Validate the JSON body with ``schema``; a missing body validates as ``{}``."""

    return schema.load(request.get_json(silent=True) or {})


def bearer_token() -> str | None:
    """Return the second whitespace-separated segment of ``Authorization``.

    The scheme word is not checked. ``None`` when the header is absent or has
    fewer than two segments.
    """

    parts = (request.headers.get("Authorization") or "").split()
    if len(parts) < 2:
        return None
    return parts[1]


def require_auth(func: F) -> F:
    """Admit the request only with a valid access token.

    Sets ``g.authenticated_user_id`` to the token subject. Every failure is
    answered with the same 401 body.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        token = bearer_token()
        if token is None:
            raise Unauthorized("Authentication required")
        try:
            g.authenticated_user_id = get_auth().validator.validate_access(token)
        except InvalidTokenError as exc:
            log.info(
                "auth.gate.rejected",
                extra={"event": "auth.gate.rejected", "endpoint": request.endpoint},
            )
            raise Unauthorized("Authentication required") from exc
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> str:
    """Return the user id set by :func:`require_auth`."""

    return g.authenticated_user_id


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            log.debug(
                "request.elapsed",
                extra={
                    "event": "request.elapsed",
                    "endpoint": request.endpoint,
                    "elapsed_ms": round(elapsed_ms, 2),
                },
            )

    return wrapper  # type: ignore[return-value]
