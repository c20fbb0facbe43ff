"""Traveller dashboard: bookings, upcoming trips, payments, profile, notifications."""
import logging
from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from wanderlust.dependencies import FormInput, get_api, get_form, get_session, require_user, validation_messages
from wanderlust.schemas import Booking, ProfileForm, User
from wanderlust.services import resources
from wanderlust.services.accounts import update_profile
from wanderlust.services.api_client import ApiClient, ApiError
from wanderlust.services.content import NOTIFICATIONS
from wanderlust.services.session import Session
from wanderlust.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])

TABS = {
    "bookings": "My Bookings",
    "trips": "Upcoming Trips",
    "payments": "Payments",
    "profile": "Profile Settings",
    "notifications": "Notifications",
}


def own_bookings(bookings: list[Booking], user: User) -> list[Booking]:
    """Keep the user's bookings; rows without an owner are assumed pre-filtered by the backend."""
    return [b for b in bookings if not b.user_id or b.user_id == user.id]


def upcoming(bookings: list[Booking], today: date) -> list[Booking]:
    out = []
    for b in bookings:
        if b.status_key in ("cancelled", "completed"):
            continue
        try:
            when = date.fromisoformat((b.date or "")[:10])
        except ValueError:
            continue
        if when >= today:
            out.append(b)
    return sorted(out, key=lambda b: b.date)


@router.get("/dashboard")
def dashboard(
    request: Request,
    tab: str = Query("bookings"),
    user: User = Depends(require_user),
    api: ApiClient = Depends(get_api),
):
    if tab not in TABS:
        tab = "bookings"
    bookings = own_bookings(resources.list_or_empty(resources.bookings, api), user)
    return render(
        request,
        "dashboard.html",
        tab=tab,
        tabs=TABS,
        user=user,
        bookings=bookings,
        trips=upcoming(bookings, date.today()),
        payments=[b for b in bookings if b.amount],
        notifications=NOTIFICATIONS,
        errors=[],
    )


@router.post("/dashboard/profile")
def dashboard_profile(
    fields: FormInput = Depends(get_form),
    user: User = Depends(require_user),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    try:
        form = ProfileForm.model_validate(fields.fields)
        update_profile(api, session, user, form)
    except ValidationError as e:
        for message in validation_messages(e):
            session.flash(message, "error")
    except ApiError as e:
        logger.warning("Profile update failed for user %s: %s", user.id, e.message)
        session.flash(f"Failed to update profile: {e.message}", "error")
    else:
        session.flash("Profile updated successfully!", "success")
    return RedirectResponse("/dashboard?tab=profile", status_code=303)
