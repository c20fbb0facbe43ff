"""Booking summary (quote + confirmation) and the general trip enquiry form."""
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from wanderlust.dependencies import FormInput, get_api, get_form, get_session, require_user, validation_messages
from wanderlust.schemas import BookingRequest, TripEnquiry, User
from wanderlust.schemas.booking import PAYMENT_METHODS, TRAVEL_TYPES
from wanderlust.services import resources
from wanderlust.services.api_client import ApiClient, ApiError
from wanderlust.services.pricing import quote_booking
from wanderlust.services.session import Session
from wanderlust.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["booking"])

PAYMENT_OK = "Payment Successful! Booking Confirmed."
ENQUIRY_OK = "Booking Request Sent Successfully!"


def _summary(request: Request, booking: BookingRequest, errors: list[str], status_code: int = 200):
    quote = quote_booking(booking.price, booking.guests)
    return render(
        request,
        "booking/summary.html",
        status_code=status_code,
        booking=booking,
        quote=quote,
        payment_methods=PAYMENT_METHODS,
        errors=errors,
    )


@router.get("/booking")
def booking_summary(request: Request):
    # Detail pages hand over the selected service in the query string
    try:
        booking = BookingRequest.model_validate(dict(request.query_params))
        errors = []
    except ValidationError as e:
        booking = BookingRequest()
        errors = validation_messages(e)
    return _summary(request, booking, errors, 200 if not errors else 400)


@router.post("/booking")
def confirm_booking(
    request: Request,
    fields: FormInput = Depends(get_form),
    user: User = Depends(require_user),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    try:
        booking = BookingRequest.model_validate(fields.fields)
    except ValidationError as e:
        return _summary(request, BookingRequest(), validation_messages(e), 400)
    quote = quote_booking(booking.price, booking.guests)
    details = f"Guests: {booking.guests}"
    if booking.traveller:
        details = f"Traveller: {booking.traveller}, {details}"
    payload = {
        "serviceType": booking.service_type,
        "serviceId": booking.id,
        "serviceName": booking.name,
        "date": booking.date,
        "amount": round(quote.total, 2),
        "details": details,
        "paymentMethod": booking.payment_method,
        "userId": user.id,
    }
    try:
        resources.bookings.create(api, payload)
    except ApiError as e:
        logger.warning("Booking failed for user %s: %s", user.id, e.message)
        return _summary(request, booking, [f"Booking failed: {e.message}"], 502)
    session.flash(PAYMENT_OK, "success")
    return RedirectResponse("/dashboard", status_code=303)


@router.get("/book")
def trip_enquiry_page(request: Request):
    return render(request, "booking/enquiry.html", travel_types=TRAVEL_TYPES, form={}, errors=[])


@router.post("/book")
def trip_enquiry(
    request: Request,
    fields: FormInput = Depends(get_form),
    user: User = Depends(require_user),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    try:
        enquiry = TripEnquiry.model_validate(fields.fields)
    except ValidationError as e:
        return render(
            request, "booking/enquiry.html", status_code=400,
            travel_types=TRAVEL_TYPES, form=fields.fields, errors=validation_messages(e),
        )
    try:
        api.post("/bookings", json=enquiry.to_payload())
    except ApiError as e:
        logger.warning("Trip enquiry failed for user %s: %s", user.id, e.message)
        return render(
            request, "booking/enquiry.html", status_code=502,
            travel_types=TRAVEL_TYPES, form=fields.fields, errors=[f"Booking failed: {e.message}"],
        )
    session.flash(ENQUIRY_OK, "success")
    return RedirectResponse("/book", status_code=303)
