"""Visitor session (bearer token, cached user, flash messages) kept in a signed cookie."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import jwt
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from wanderlust.config import Settings, get_settings
from wanderlust.schemas import User

logger = logging.getLogger(__name__)


@dataclass
class Session:
    token: str | None = None
    user: dict | None = None
    flashes: list[dict] = field(default_factory=list)
    modified: bool = False

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token and self.user)

    @property
    def current_user(self) -> User | None:
        if not self.user:
            return None
        return User.model_validate(self.user)

    def login(self, token: str, user: dict) -> None:
        self.token = token
        self.remember_user(user)

    def remember_user(self, user: dict) -> None:
        cached = {k: v for k, v in (user or {}).items() if k != "password"}
        self.user = cached
        self.modified = True

    def clear(self) -> None:
        self.token = None
        self.user = None
        self.modified = True

    def flash(self, message: str, category: str = "info") -> None:
        self.flashes.append({"message": message, "category": category})
        self.modified = True

    def pop_flashes(self) -> list[dict]:
        out, self.flashes = self.flashes, []
        if out:
            self.modified = True
        return out


def encode_session(session: Session, settings: Settings) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.session_max_age_minutes)
    payload = {"token": session.token, "user": session.user, "flashes": session.flashes, "exp": expire}
    raw = jwt.encode(payload, settings.secret_key, algorithm=settings.session_algorithm)
    return raw if isinstance(raw, str) else raw.decode("utf-8")


def decode_session(raw: str | None, settings: Settings) -> Session:
    """A missing, expired or tampered cookie yields an empty session."""
    if not raw:
        return Session()
    try:
        payload = jwt.decode(raw, settings.secret_key, algorithms=[settings.session_algorithm])
    except jwt.ExpiredSignatureError:
        logger.info("Session cookie expired")
        return Session(modified=True)
    except jwt.PyJWTError as e:
        logger.warning("Rejected session cookie: %s", e)
        return Session(modified=True)
    user = payload.get("user")
    flashes = payload.get("flashes")
    return Session(
        token=payload.get("token") or None,
        user=user if isinstance(user, dict) else None,
        flashes=flashes if isinstance(flashes, list) else [],
    )


class SessionMiddleware(BaseHTTPMiddleware):
    """Loads the session into request.state.session and writes it back when it changed."""

    async def dispatch(self, request: Request, call_next):
        settings = get_settings()
        session = decode_session(request.cookies.get(settings.session_cookie_name), settings)
        request.state.session = session
        response = await call_next(request)
        if session.modified:
            if session.token or session.user or session.flashes:
                response.set_cookie(
                    settings.session_cookie_name,
                    encode_session(session, settings),
                    max_age=settings.session_max_age_minutes * 60,
                    httponly=True,
                    samesite="lax",
                    secure=settings.app_env == "production",
                )
            else:
                response.delete_cookie(settings.session_cookie_name)
        return response
