"""Admin back-office: overview, bookings, users, site settings and the admin's own profile."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from wanderlust.dependencies import FormInput, get_api, get_form, get_session, require_admin, validation_messages
from wanderlust.schemas import (
    Booking,
    BookingStatus,
    PaymentStatus,
    ProfileForm,
    SettingsForm,
    SiteSettings,
    User,
    UserRole,
)
from wanderlust.services import resources
from wanderlust.services.accounts import update_profile
from wanderlust.services.api_client import ApiClient, ApiError
from wanderlust.services.pricing import booking_stats
from wanderlust.services.session import Session
from wanderlust.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

RECENT_BOOKINGS = 5


@router.get("")
def overview(request: Request, admin: User = Depends(require_admin), api: ApiClient = Depends(get_api)):
    bookings = resources.list_or_empty(resources.bookings, api)
    return render(
        request,
        "admin/dashboard.html",
        stats=booking_stats(bookings),
        recent=bookings[:RECENT_BOOKINGS],
        active="overview",
    )


# --- Bookings ---

def booking_payload(booking: Booking) -> dict:
    """The whole booking as the API stores it; status changes PUT every field back."""
    data = booking.model_dump(by_alias=True, exclude={"user"})
    data.pop("id", None)
    return data


def _get_booking(api: ApiClient, booking_id: str) -> Booking:
    booking = resources.get_or_none(resources.bookings, api, booking_id)
    if booking is None:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


@router.get("/bookings")
def bookings_list(request: Request, admin: User = Depends(require_admin), api: ApiClient = Depends(get_api)):
    return render(
        request,
        "admin/bookings.html",
        bookings=resources.list_or_empty(resources.bookings, api),
        statuses=[s.value for s in BookingStatus],
        payment_statuses=[s.value for s in PaymentStatus],
        active="bookings",
    )


@router.get("/bookings/{booking_id}")
def booking_detail(
    request: Request,
    booking_id: str,
    admin: User = Depends(require_admin),
    api: ApiClient = Depends(get_api),
):
    return render(
        request,
        "admin/booking_detail.html",
        booking=_get_booking(api, booking_id),
        statuses=[s.value for s in BookingStatus],
        payment_statuses=[s.value for s in PaymentStatus],
        active="bookings",
    )


def _back(fields: FormInput) -> str:
    # Only return to pages inside the back-office
    target = fields.get("next") or ""
    return target if target.startswith("/admin/bookings") else "/admin/bookings"


def _change_booking(
    api: ApiClient, session: Session, booking_id: str, key: str, value: str, allowed: list[str], label: str
):
    if value not in allowed:
        session.flash(f"Failed to update {label}: unknown value {value!r}", "error")
        return
    try:
        booking = resources.bookings.get(api, booking_id)
        if booking is None:
            session.flash(f"Failed to update {label}: Booking not found", "error")
            return
        payload = booking_payload(booking)
        payload[key] = value
        resources.bookings.update(api, booking_id, payload)
    except ApiError as e:
        logger.warning("Updating booking %s failed: %s", booking_id, e.message)
        session.flash(f"Failed to update {label}: {e.message}", "error")
    else:
        session.flash("Booking updated.", "success")


@router.post("/bookings/{booking_id}/status")
def booking_status(
    booking_id: str,
    fields: FormInput = Depends(get_form),
    admin: User = Depends(require_admin),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    _change_booking(
        api, session, booking_id, "status", fields.get("status", ""), [s.value for s in BookingStatus], "status"
    )
    return RedirectResponse(_back(fields), status_code=303)


@router.post("/bookings/{booking_id}/payment")
def booking_payment(
    booking_id: str,
    fields: FormInput = Depends(get_form),
    admin: User = Depends(require_admin),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    _change_booking(
        api, session, booking_id, "paymentStatus", fields.get("payment_status", ""),
        [s.value for s in PaymentStatus], "payment status",
    )
    return RedirectResponse(_back(fields), status_code=303)


# --- Users ---

@router.get("/users")
def users_list(request: Request, admin: User = Depends(require_admin), api: ApiClient = Depends(get_api)):
    return render(
        request,
        "admin/users.html",
        users=resources.list_or_empty(resources.users, api),
        roles=[r.value for r in UserRole],
        active="users",
    )


@router.post("/users/{user_id}/role")
def user_role(
    user_id: str,
    fields: FormInput = Depends(get_form),
    admin: User = Depends(require_admin),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    role = (fields.get("role") or "").strip().lower()
    if role not in [r.value for r in UserRole]:
        session.flash(f"Failed to update role: unknown role {role!r}", "error")
        return RedirectResponse("/admin/users", status_code=303)
    try:
        resources.users.update(api, user_id, {"role": role})
    except ApiError as e:
        logger.warning("Role change for user %s failed: %s", user_id, e.message)
        session.flash(f"Failed to update role: {e.message}", "error")
    else:
        session.flash("User role updated.", "success")
    return RedirectResponse("/admin/users", status_code=303)


@router.post("/users/{user_id}/delete")
def user_delete(
    user_id: str,
    admin: User = Depends(require_admin),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    if user_id == admin.id:
        session.flash("You cannot delete your own account.", "error")
        return RedirectResponse("/admin/users", status_code=303)
    try:
        resources.users.delete(api, user_id)
    except ApiError as e:
        logger.warning("Deleting user %s failed: %s", user_id, e.message)
        session.flash(f"Failed to delete user: {e.message}", "error")
    else:
        session.flash("User deleted.", "success")
    return RedirectResponse("/admin/users", status_code=303)


# --- Site settings ---

@router.get("/settings")
def settings_page(request: Request, admin: User = Depends(require_admin), api: ApiClient = Depends(get_api)):
    try:
        site = resources.get_site_settings(api)
    except ApiError as e:
        logger.warning("Error fetching settings: %s", e.message)
        site = SiteSettings()
    return render(request, "admin/settings.html", site=site, errors=[], active="settings")


@router.post("/settings")
def settings_save(
    request: Request,
    fields: FormInput = Depends(get_form),
    admin: User = Depends(require_admin),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    values = dict(fields.fields)
    try:
        for key in ("logo", "favicon"):
            upload = fields.files.get(f"{key}_file")
            if upload:
                values[key] = api.upload(*upload)
        form = SettingsForm.model_validate(values)
        resources.save_site_settings(api, form.to_payload())
    except ApiError as e:
        logger.warning("Saving settings failed: %s", e.message)
        site = SiteSettings.model_validate(values)
        return render(
            request, "admin/settings.html", status_code=502,
            site=site, errors=[f"Failed to save settings: {e.message}"], active="settings",
        )
    session.flash("Settings saved successfully!", "success")
    return RedirectResponse("/admin/settings", status_code=303)


# --- Own profile ---

@router.get("/profile")
def profile_page(request: Request, admin: User = Depends(require_admin)):
    return render(request, "admin/profile.html", user=admin, errors=[], active="profile")


@router.post("/profile")
def profile_save(
    request: Request,
    fields: FormInput = Depends(get_form),
    admin: User = Depends(require_admin),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    values = dict(fields.fields)
    try:
        upload = fields.files.get("avatar_file")
        if upload:
            values["avatar"] = api.upload(*upload)
        form = ProfileForm.model_validate(values)
        update_profile(api, session, admin, form)
    except ValidationError as e:
        return render(
            request, "admin/profile.html", status_code=400,
            user=admin, errors=validation_messages(e), active="profile",
        )
    except ApiError as e:
        logger.warning("Admin profile update failed for %s: %s", admin.id, e.message)
        return render(
            request, "admin/profile.html", status_code=502,
            user=admin, errors=[f"Failed to update profile: {e.message}"], active="profile",
        )
    session.flash("Profile updated successfully!", "success")
    return RedirectResponse("/admin/profile", status_code=303)
