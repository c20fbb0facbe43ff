"""Sign in, sign up and sign out (visitor and admin portals)."""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from wanderlust.dependencies import FormInput, get_api, get_form, get_session, validation_messages
from wanderlust.schemas import LoginForm, SignupForm, User
from wanderlust.services.api_client import ApiClient, ApiError
from wanderlust.services.session import Session
from wanderlust.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

LOGIN_FAILED = "Login failed. Please check your credentials."
ADMIN_ONLY = "Access denied. Admin privileges required."


def _authenticate(api: ApiClient, form: LoginForm) -> tuple[str, dict]:
    """POST /auth/login; returns (token, user). Raises ApiError on rejection."""
    data = api.post("/auth/login", json={"email": form.email, "password": form.password})
    token = (data or {}).get("token") if isinstance(data, dict) else None
    user = (data or {}).get("user") if isinstance(data, dict) else None
    if not token or not isinstance(user, dict):
        raise ApiError(502, LOGIN_FAILED)
    return token, user


def _login_page(request: Request, template: str, fields: FormInput, error: str, status_code: int):
    return render(request, template, status_code=status_code, error=error, email=fields.get("email", ""))


@router.get("/login")
def login_page(request: Request):
    return render(request, "login.html", error=None, email="")


@router.post("/login")
def login(
    request: Request,
    fields: FormInput = Depends(get_form),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    try:
        form = LoginForm.model_validate(fields.fields)
        token, user = _authenticate(api, form)
    except ValidationError:
        return _login_page(request, "login.html", fields, "Email and password are required.", 400)
    except ApiError as e:
        logger.info("Login rejected for %s: %s", fields.get("email"), e.message)
        return _login_page(request, "login.html", fields, e.message or LOGIN_FAILED, 401)
    session.login(token, user)
    return RedirectResponse("/", status_code=303)


@router.get("/admin-login")
def admin_login_page(request: Request):
    return render(request, "admin/login.html", error=None, email="")


@router.post("/admin-login")
def admin_login(
    request: Request,
    fields: FormInput = Depends(get_form),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    try:
        form = LoginForm.model_validate(fields.fields)
        token, user = _authenticate(api, form)
    except ValidationError:
        return _login_page(request, "admin/login.html", fields, "Email and password are required.", 400)
    except ApiError as e:
        logger.info("Admin login rejected for %s: %s", fields.get("email"), e.message)
        return _login_page(request, "admin/login.html", fields, e.message or LOGIN_FAILED, 401)
    if not User.model_validate(user).is_admin:
        return _login_page(request, "admin/login.html", fields, ADMIN_ONLY, 403)
    session.login(token, user)
    return RedirectResponse("/admin", status_code=303)


@router.get("/signup")
def signup_page(request: Request):
    return render(request, "signup.html", errors=[], form={})


@router.post("/signup")
def signup(
    request: Request,
    fields: FormInput = Depends(get_form),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    try:
        form = SignupForm.model_validate(fields.fields)
    except ValidationError as e:
        return render(request, "signup.html", status_code=400, errors=validation_messages(e), form=fields.fields)
    try:
        data = api.post("/auth/register", json=form.to_payload())
    except ApiError as e:
        return render(request, "signup.html", status_code=400, errors=[f"Signup failed: {e.message}"], form=fields.fields)
    # Some backends sign the new user straight in
    if isinstance(data, dict) and data.get("token") and isinstance(data.get("user"), dict):
        session.login(data["token"], data["user"])
        session.flash("Welcome aboard! Your account has been created.", "success")
        return RedirectResponse("/", status_code=303)
    session.flash("Account created. Please sign in.", "success")
    return RedirectResponse("/login", status_code=303)


@router.get("/logout")
def logout(session: Session = Depends(get_session)):
    session.clear()
    return RedirectResponse("/", status_code=303)


@router.get("/admin/logout")
def admin_logout(session: Session = Depends(get_session)):
    session.clear()
    return RedirectResponse("/admin-login", status_code=303)
