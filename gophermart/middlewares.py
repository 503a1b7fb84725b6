"""Request middlewares: gzip, authorization, request logging and crash recovery."""

from __future__ import annotations

import gzip
import io
import time
import traceback
import zlib
from typing import Any, Callable, Iterable

from flask import Response, g, request
from werkzeug.datastructures import EnvironHeaders
from werkzeug.exceptions import HTTPException
from werkzeug.wsgi import get_input_stream

from gophermart import logger
from gophermart.webtools import (
    HEADER_ACCEPT,
    HEADER_ACCEPT_ENCODING,
    HEADER_CONTENT_ENCODING,
    HEADER_CONTENT_TYPE,
    get_token_cookie,
    set_user_id,
)

SUPPORTED_MIME_TYPES = ("application/json", "text/html")

_STARTED_KEY = "_request_started"


def _header_values(headers: Any, name: str) -> list[str]:
    if hasattr(headers, "getlist"):
        return list(headers.getlist(name))
    value = headers.get(name)
    return [] if value is None else [value]


def is_gzip_supported(headers: Any) -> bool:
    """Tell whether the client accepts gzip-encoded responses."""
    value = headers.get(HEADER_ACCEPT_ENCODING) or ""
    return "gzip" in value


def is_request_compressed(headers: Any) -> bool:
    """Tell whether the request body is gzip-encoded."""
    value = headers.get(HEADER_CONTENT_ENCODING) or ""
    return "gzip" in value


def is_supported_mime_type(headers: Any) -> bool:
    """Tell whether Accept or Content-Type names a type worth compressing."""
    for name in (HEADER_ACCEPT, HEADER_CONTENT_TYPE):
        for value in _header_values(headers, name):
            if any(mime in value for mime in SUPPORTED_MIME_TYPES):
                return True
    return False


def _should_compress(method: str, code: int) -> bool:
    return method != "HEAD" and 200 <= code < 300 and code != 204


class CompressMiddleware:
    """WSGI middleware that gunzips request bodies and gzips successful responses."""

    def __init__(self, app: Callable, prefix: str = "/api") -> None:
        self.app = app
        self.prefix = prefix

    def __call__(self, environ: dict, start_response: Callable) -> Iterable[bytes]:
        if not environ.get("PATH_INFO", "").startswith(self.prefix):
            return self.app(environ, start_response)

        headers = EnvironHeaders(environ)

        if is_request_compressed(headers):
            try:
                data = gzip.decompress(get_input_stream(environ).read())
            except (OSError, EOFError, zlib.error):
                start_response("500 Internal Server Error", [("Content-Length", "0")])
                return [b""]
            environ = dict(environ)
            environ["wsgi.input"] = io.BytesIO(data)
            environ["CONTENT_LENGTH"] = str(len(data))
            environ.pop("wsgi.input_terminated", None)

        if not (is_gzip_supported(headers) and is_supported_mime_type(headers)):
            return self.app(environ, start_response)

        return self._compressed(environ, start_response)

    def _compressed(self, environ: dict, start_response: Callable) -> Iterable[bytes]:
        chunks: list[bytes] = []
        captured: dict[str, Any] = {}

        def capture(status, response_headers, exc_info=None):
            if exc_info is not None and captured:
                raise exc_info[1].with_traceback(exc_info[2])
            captured.update(status=status, headers=list(response_headers), exc_info=exc_info)
            return chunks.append

        result = self.app(environ, capture)
        try:
            for chunk in result:
                chunks.append(chunk)
        finally:
            close = getattr(result, "close", None)
            if close is not None:
                close()

        status: str = captured["status"]
        headers: list[tuple[str, str]] = captured["headers"]
        body = b"".join(chunks)
        code = int(status.split(None, 1)[0])

        if _should_compress(environ.get("REQUEST_METHOD", "GET"), code):
            body = gzip.compress(body)
            headers = [
                (key, value)
                for key, value in headers
                if key.lower() not in ("content-length", "content-encoding")
            ]
            headers.append((HEADER_CONTENT_ENCODING, "gzip"))
            headers.append(("Content-Length", str(len(body))))

        start_response(status, headers, captured.get("exc_info"))
        return [body]


def make_auth_hook(use_cases: Any) -> Callable[[], Response | None]:
    """Build a before-request hook that admits only requests with a valid token."""

    def authorize() -> Response | None:
        try:
            token = get_token_cookie()
            user_id = use_cases.verify_user_authorization(token)
        except Exception as exc:
            logger.error("failed to authorize user: %s", exc)
            return Response(status=401)
        set_user_id(user_id)
        return None

    return authorize


def install_request_logging(blueprint: Any) -> None:
    """Log method, status, path, query and duration of every request."""

    @blueprint.before_request
    def _start() -> None:
        setattr(g, _STARTED_KEY, time.perf_counter())

    @blueprint.after_request
    def _log(response: Response) -> Response:
        started = g.get(_STARTED_KEY, time.perf_counter())
        logger.info(
            "api request",
            method=request.method,
            status=response.status_code,
            path=request.path,
            query=request.query_string.decode("latin-1"),
            duration=time.perf_counter() - started,
        )
        return response


def install_recovery(app: Any) -> None:
    """Turn unhandled exceptions into an empty 500 reply and log them."""

    @app.errorhandler(Exception)
    def _recover(exc: Exception):
        if isinstance(exc, HTTPException):
            return exc
        details = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        logger.error("panic", err=details)
        return Response(status=500)