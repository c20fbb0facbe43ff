"""Bookings: the record, the summary form and the general trip enquiry."""
import enum
import math

from pydantic import BaseModel, Field, field_validator

from wanderlust.schemas.base import FormModel, Record


class ServiceType(str, enum.Enum):
    package = "PACKAGE"
    taxi = "TAXI"
    hotel = "HOTEL"
    homestay = "HOMESTAY"


class BookingStatus(str, enum.Enum):
    pending = "Pending"
    confirmed = "Confirmed"
    cancelled = "Cancelled"
    completed = "Completed"


class PaymentStatus(str, enum.Enum):
    paid = "Paid"
    unpaid = "Unpaid"


# Options offered by the general enquiry form
TRAVEL_TYPES = ["Package", "Homestay", "Taxi", "Hotel", "Trekking", "Temple Tour", "Adventure"]

PAYMENT_METHODS = {
    "card": "Credit/Debit Card",
    "upi": "UPI / GPay",
    "netbanking": "Net Banking",
}


def normalize_service_type(value: str | None) -> str:
    """'Package', 'package' and 'PACKAGE' all name the same service."""
    return (value or "").strip().upper()


class BookingUser(BaseModel):
    name: str = ""
    email: str = ""


class Booking(Record):
    id: str = ""
    user_id: str | None = None
    customer_name: str | None = None
    service_type: str = ""
    service_id: str = ""
    service_name: str = ""
    details: str | None = None
    date: str = ""
    status: str = BookingStatus.pending.value
    amount: float = 0
    payment_status: str = PaymentStatus.unpaid.value
    user: BookingUser | None = None

    @field_validator("user_id", mode="before")
    @classmethod
    def user_id_as_str(cls, v):
        return None if v is None else str(v)

    @field_validator("amount", mode="before")
    @classmethod
    def amount_or_zero(cls, v):
        try:
            amount = float(v)
        except (TypeError, ValueError):
            return 0
        return amount if math.isfinite(amount) else 0

    @property
    def customer(self) -> str:
        if self.customer_name:
            return self.customer_name
        return self.user.name if self.user else ""

    @property
    def status_key(self) -> str:
        return (self.status or "").strip().lower()

    @property
    def is_paid(self) -> bool:
        return (self.payment_status or "").strip().lower() == "paid"


class BookingRequest(FormModel):
    """What the booking summary page submits; price is re-quoted server-side."""
    type: str = ServiceType.package.value
    id: str = ""
    name: str = ""
    price: float = Field(0, ge=0, allow_inf_nan=False)
    image: str = ""
    date: str = ""
    guests: int = Field(1, ge=1)
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    phone: str = ""
    payment_method: str = "card"

    @field_validator("payment_method")
    @classmethod
    def known_method(cls, v: str) -> str:
        if v not in PAYMENT_METHODS:
            raise ValueError(f"Unsupported payment method: {v}")
        return v

    @property
    def service_type(self) -> str:
        return normalize_service_type(self.type)

    @property
    def traveller(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class TripEnquiry(FormModel):
    service_type: str = "Taxi"
    pickup: str = Field(..., min_length=1)
    destination: str = Field(..., min_length=1)
    date: str = Field(..., min_length=1)
    travelers: int = Field(1, ge=1)

    def to_payload(self) -> dict:
        return {
            "serviceType": self.service_type,
            "date": self.date,
            "details": f"Pickup: {self.pickup}, Destination: {self.destination}, Travelers: {self.travelers}",
            "amount": 0,
            "serviceId": "general-inquiry",
        }
