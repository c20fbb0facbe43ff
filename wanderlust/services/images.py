"""Image URLs: backend uploads are relative to the API host, everything else is used as is."""
from __future__ import annotations

from urllib.parse import urlsplit

from markupsafe import Markup, escape

UPLOADS_PREFIX = "/uploads"
DEFAULT_ORIGIN = "http://localhost:5000"
PLACEHOLDER_TEXT = "No Image"


def api_origin(api_url: str) -> str | None:
    parts = urlsplit(api_url or "")
    if not parts.scheme or not parts.netloc:
        return None
    return f"{parts.scheme}://{parts.netloc}"


def resolve_image_url(src: str | None, api_url: str) -> str | None:
    """None means "render the placeholder"."""
    if not src or not src.strip():
        return None
    src = src.strip()
    if src.startswith(UPLOADS_PREFIX):
        # Static files are served from the server root, not under /api
        return f"{api_origin(api_url) or DEFAULT_ORIGIN}{src}"
    return src


def placeholder_label(alt: str | None = None, fallback_text: str | None = None) -> str:
    return fallback_text or alt or PLACEHOLDER_TEXT


def image_tag(src: str | None, api_url: str, alt: str = "", css_class: str = "", fallback_text: str | None = None) -> Markup:
    """<img> that swaps itself for a text placeholder when the source fails to load."""
    label = escape(placeholder_label(alt, fallback_text))
    cls = escape(css_class)
    url = resolve_image_url(src, api_url)
    if url is None:
        return Markup(f'<div class="img-fallback {cls}">{label}</div>')
    onerror = (
        "var d=document.createElement('div');"
        f"d.className='img-fallback {cls}';"
        "d.textContent=this.dataset.fallback;"
        "this.replaceWith(d);"
    )
    return Markup(
        f'<img src="{escape(url)}" alt="{escape(alt)}" class="{cls}" '
        f'data-fallback="{label}" onerror="{escape(onerror)}">'
    )
