"""User registration, login and session tokens.

This sits outside the aggregation core: it only maps credentials and tokens
to a user id that scopes every ledger query.
"""

from __future__ import annotations

import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

from ..config import BaseConfig
from ..domain.repositories import UserRepository
from ..errors import AuthenticationError, ValidationError
from ..logging_config import get_logger
from ..models.user import User

logger = get_logger(__name__)

_hasher = PasswordHasher()
_RESERVED_USERNAMES = {"admin", "guest", "root"}
MIN_PASSWORD_LENGTH = 8

Clock = Callable[[], datetime]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def register_user(
    *, username: str, password: str, full_name: str = "", users: UserRepository
) -> User:
    """Create a new user with an argon2 password hash."""

    username = username.strip()
    if not username:
        raise ValidationError("username", "This field is required.")
    if username.lower() in _RESERVED_USERNAMES:
        raise ValidationError("username", "This username is reserved.")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            "password", f"Use at least {MIN_PASSWORD_LENGTH} characters."
        )
    if users.get_by_username(username) is not None:
        raise ValidationError("username", "Username already exists.")

    user = users.create(
        User(username=username, password_hash=_hasher.hash(password), full_name=full_name.strip())
    )
    logger.info("User registered", extra={"user_id": user.id})
    return user


def authenticate(*, username: str, password: str, users: UserRepository) -> User:
    """Return the user for valid credentials or raise ``AuthenticationError``."""

    user = users.get_by_username(username)
    if user is None:
        raise AuthenticationError("Invalid credentials")
    try:
        _hasher.verify(user.password_hash, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError) as exc:
        logger.warning("Failed login", extra={"user_id": user.id})
        raise AuthenticationError("Invalid credentials") from exc
    return user


@dataclass(frozen=True, slots=True)
class SessionToken:
    token: str
    user_id: int
    expires_at: datetime


class TokenStore:
    """In-process map from opaque session tokens to user ids with a fixed TTL."""

    def __init__(self, *, ttl: timedelta, clock: Clock = _utcnow):
        if ttl <= timedelta(0):
            raise ValueError("Token TTL must be positive.")
        self._ttl = ttl
        self._clock = clock
        self._tokens: dict[str, SessionToken] = {}

    @classmethod
    def from_config(cls, config: BaseConfig, *, clock: Clock = _utcnow) -> TokenStore:
        """Store whose lifetime is ``SESSION_TTL_MINUTES``."""
        return cls(ttl=timedelta(minutes=config.SESSION_TTL_MINUTES), clock=clock)

    def issue(self, user_id: int) -> SessionToken:
        session = SessionToken(
            token=secrets.token_urlsafe(32),
            user_id=user_id,
            expires_at=self._clock() + self._ttl,
        )
        self._tokens[session.token] = session
        return session

    def resolve(self, token: str) -> int | None:
        """User id for a live token; expired tokens are dropped."""
        session = self._tokens.get(token)
        if session is None:
            return None
        if session.expires_at <= self._clock():
            del self._tokens[token]
            return None
        return session.user_id

    def require(self, token: str) -> int:
        user_id = self.resolve(token)
        if user_id is None:
            raise AuthenticationError("Unauthorized")
        return user_id

    def revoke(self, token: str) -> bool:
        return self._tokens.pop(token, None) is not None

    def purge_expired(self) -> int:
        now = self._clock()
        expired = [token for token, s in self._tokens.items() if s.expires_at <= now]
        for token in expired:
            del self._tokens[token]
        return len(expired)

    def __len__(self) -> int:
        return len(self._tokens)


__all__ = ["SessionToken", "TokenStore", "authenticate", "register_user"]
