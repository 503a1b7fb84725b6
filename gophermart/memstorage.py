"""In-memory storage of authorization tokens."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass

from gophermart.models import NotFoundError

TOKEN_LIFETIME = 24 * 60 * 60.0


@dataclass(frozen=True)
class _TokenInfo:
    user_id: int
    expires_at: float


class MemStorage:
    """Thread-safe token store; each token lives for a day after its last use."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens: dict[str, _TokenInfo] = {}

    def get_by_token(self, token: str) -> int:
        """Return the user a token belongs to; NotFoundError if it is unknown."""
        with self._lock:
            info = self._tokens.get(token)
        if info is None:
            raise NotFoundError()
        return info.user_id

    def set_token(self, user_id: int, token: str) -> None:
        """Bind a token to a user, replacing the user's previous token."""
        now = time.monotonic()
        with self._lock:
            previous = next(
                (key for key, info in self._tokens.items() if info.user_id == user_id),
                None,
            )
            if previous is not None:
                del self._tokens[previous]
            self._tokens[token] = _TokenInfo(user_id, now + TOKEN_LIFETIME)

    def refresh_token(self, token: str) -> None:
        """Extend a token's life; NotFoundError if it is unknown."""
        now = time.monotonic()
        with self._lock:
            info = self._tokens.get(token)
            if info is None:
                raise NotFoundError()
            self._tokens[token] = _TokenInfo(info.user_id, now + TOKEN_LIFETIME)

    def clear_expired_tokens(self) -> None:
        """Drop every token whose lifetime has run out."""
        now = time.monotonic()
        with self._lock:
            self._tokens = {
                token: info for token, info in self._tokens.items() if now < info.expires_at
            }