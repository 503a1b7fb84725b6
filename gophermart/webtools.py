"""Helpers for HTTP requests: the auth cookie, the current user and JSON replies."""

from __future__ import annotations

from flask import Response, g, request
from werkzeug.exceptions import Unauthorized

HEADER_ACCEPT = "Accept"
HEADER_ACCEPT_ENCODING = "Accept-Encoding"
HEADER_CONTENT_ENCODING = "Content-Encoding"
HEADER_CONTENT_TYPE = "Content-Type"

JSON_CONTENT_TYPE = "application/json; charset=utf-8"

TOKEN_COOKIE_NAME = "token"
_USER_ID_KEY = "user_id"


class NoUserIDError(Unauthorized):
    """No authorized user is bound to the current request; answered with 401."""

    description = "no user_id in context"

    def get_response(self, environ=None, scope=None) -> Response:
        return Response(status=self.code)


def get_token_cookie() -> str:
    """Return the auth token cookie of the current request; LookupError if absent."""
    token = request.cookies.get(TOKEN_COOKIE_NAME)
    if token is None:
        raise LookupError("named cookie not present")
    return token


def set_token_cookie(response: Response, token: str) -> None:
    """Attach the auth token as an HTTP-only session cookie."""
    response.set_cookie(TOKEN_COOKIE_NAME, token, path="/", httponly=True)


def get_user_id() -> int:
    """Return the authorized user of the current request; NoUserIDError if none."""
    user_id = g.get(_USER_ID_KEY, 0)
    if not user_id:
        raise NoUserIDError()
    return user_id


def set_user_id(user_id: int) -> None:
    """Bind an authorized user to the current request."""
    setattr(g, _USER_ID_KEY, user_id)


def write_json(status: int, body: bytes) -> Response:
    """Build a response carrying already encoded JSON."""
    return Response(body, status=status, content_type=JSON_CONTENT_TYPE)