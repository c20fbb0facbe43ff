"""Wanderlust - server-rendered travel booking site and admin back-office."""
import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from wanderlust.config import get_settings
from wanderlust.dependencies import AdminRequired, LoginRequired, get_session
from wanderlust.routers import admin, admin_catalog, auth, blog, booking, dashboard, packages, pages, stays, taxis
from wanderlust.services.api_client import SessionExpired
from wanderlust.services.session import SessionMiddleware
from wanderlust.templating import render

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

LOGIN_PAGES = ("/login", "/admin-login")

app = FastAPI(title=settings.app_name, debug=settings.debug)

app.add_middleware(SessionMiddleware)
app.mount("/static", StaticFiles(directory=str(Path(__file__).resolve().parent / "static")), name="static")

app.include_router(pages.router)
app.include_router(auth.router)
app.include_router(packages.router)
app.include_router(stays.router)
app.include_router(taxis.router)
app.include_router(blog.router)
app.include_router(booking.router)
app.include_router(dashboard.router)
app.include_router(admin.router)
# Catch-all /admin/{slug} routes go last
app.include_router(admin_catalog.router)


@app.exception_handler(SessionExpired)
def session_expired(request: Request, exc: SessionExpired):
    logger.info("Session expired on %s: %s", request.url.path, exc.message)
    session = get_session(request)
    session.clear()
    if request.url.path in LOGIN_PAGES:
        template = "admin/login.html" if request.url.path == "/admin-login" else "login.html"
        return render(request, template, status_code=401, error="Your session has expired. Please sign in again.", email="")
    return RedirectResponse("/login", status_code=303)


@app.exception_handler(LoginRequired)
def login_required(request: Request, exc: LoginRequired):
    get_session(request).flash("Please sign in to continue.", "info")
    return RedirectResponse("/login", status_code=303)


@app.exception_handler(AdminRequired)
def admin_required(request: Request, exc: AdminRequired):
    return RedirectResponse("/admin-login", status_code=303)


@app.exception_handler(StarletteHTTPException)
async def not_found(request: Request, exc: StarletteHTTPException):
    if exc.status_code != 404:
        return await http_exception_handler(request, exc)
    detail = exc.detail if exc.detail and exc.detail != "Not Found" else "Page not found"
    return render(request, "not_found.html", status_code=404, detail=detail)
