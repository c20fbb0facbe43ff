"""Shared dependencies: session, API client, current user."""
from typing import Iterator

import httpx
from fastapi import Depends, Request
from pydantic import ValidationError
from starlette.datastructures import UploadFile as StarletteUploadFile

from wanderlust.config import get_settings
from wanderlust.schemas import User
from wanderlust.services.api_client import ApiClient
from wanderlust.services.session import Session


class LoginRequired(Exception):
    """Visitor must sign in before using this page."""


class AdminRequired(Exception):
    """Page is reserved for administrators."""


def get_session(request: Request) -> Session:
    session = getattr(request.state, "session", None)
    if session is None:
        # Only reachable when the app runs without SessionMiddleware
        session = Session()
        request.state.session = session
    return session


def get_api_transport() -> httpx.BaseTransport | None:
    """Real network by default; tests swap in an in-memory transport."""
    return None


def get_api(
    session: Session = Depends(get_session),
    transport: httpx.BaseTransport | None = Depends(get_api_transport),
) -> Iterator[ApiClient]:
    settings = get_settings()
    client = ApiClient(
        settings.api_url,
        token=session.token,
        timeout=settings.api_timeout_seconds,
        transport=transport,
    )
    try:
        yield client
    finally:
        client.close()


def require_user(session: Session = Depends(get_session)) -> User:
    if not session.is_authenticated:
        raise LoginRequired()
    return session.current_user


def require_admin(session: Session = Depends(get_session)) -> User:
    user = session.current_user if session.is_authenticated else None
    if not user or not user.is_admin:
        raise AdminRequired()
    return user


class FormInput:
    """A submitted HTML form: text fields (lists for repeated names) plus uploaded files."""

    def __init__(self, fields: dict | None = None, files: dict | None = None):
        self.fields = fields or {}
        self.files = files or {}

    def get(self, key: str, default=None):
        return self.fields.get(key, default)


async def get_form(request: Request) -> FormInput:
    form = await request.form()
    fields: dict[str, list] = {}
    files = {}
    for key, value in form.multi_items():
        if isinstance(value, StarletteUploadFile):
            # An untouched file input still posts an empty part
            if value.filename:
                files[key] = (value.filename, await value.read(), value.content_type)
        else:
            fields.setdefault(key, []).append(value)
    return FormInput({k: v[0] if len(v) == 1 else v for k, v in fields.items()}, files)


def validation_messages(exc: ValidationError) -> list[str]:
    out = []
    for err in exc.errors():
        msg = err.get("msg", "Invalid value")
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, "):]
        loc = [str(p) for p in err.get("loc", ()) if p != "__root__"]
        out.append(f"{loc[-1].replace('_', ' ').capitalize()}: {msg}" if loc else msg)
    return out
