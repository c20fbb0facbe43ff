"""Jinja2 environment shared by every page."""
from pathlib import Path

from fastapi import Request
from fastapi.templating import Jinja2Templates

from wanderlust.config import get_settings
from wanderlust.dependencies import get_session
from wanderlust.services.images import image_tag
from wanderlust.services.pricing import money

TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def _image(src, alt="", css_class="", fallback_text=None):
    return image_tag(src, get_settings().api_url, alt=alt, css_class=css_class, fallback_text=fallback_text)


templates.env.globals["image"] = _image
templates.env.filters["money"] = money


def render(request: Request, name: str, status_code: int = 200, **context):
    session = get_session(request)
    context.setdefault("current_user", session.current_user if session.is_authenticated else None)
    context.setdefault("app_name", get_settings().app_name)
    context["flashes"] = session.pop_flashes()
    return templates.TemplateResponse(request, name, context, status_code=status_code)
