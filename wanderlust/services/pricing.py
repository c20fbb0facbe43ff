"""Price arithmetic shown on booking, package, taxi and admin pages."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from wanderlust.config import get_settings
from wanderlust.schemas import Booking

PACKAGE_ESTIMATE_TRAVELLERS = 2
LISTING_MARKUP = 200


@dataclass(frozen=True)
class BookingQuote:
    unit_price: float
    guests: int
    tax_rate: float

    @property
    def base(self) -> float:
        return self.unit_price * self.guests

    @property
    def taxes(self) -> float:
        return self.base * self.tax_rate

    @property
    def total(self) -> float:
        return self.unit_price * self.guests * (1 + self.tax_rate)


def quote_booking(unit_price: float, guests: int, tax_rate: float | None = None) -> BookingQuote:
    """total = unit_price x guests x (1 + tax_rate); the rate defaults to the configured one."""
    if tax_rate is None:
        tax_rate = get_settings().tax_rate
    if guests < 0:
        raise ValueError("guests must be a non-negative integer")
    if unit_price < 0:
        raise ValueError("unit_price must not be negative")
    return BookingQuote(unit_price=float(unit_price), guests=int(guests), tax_rate=tax_rate)


def package_estimate(price: float, service_fee: float | None = None) -> float:
    if service_fee is None:
        service_fee = get_settings().package_service_fee
    return price * PACKAGE_ESTIMATE_TRAVELLERS + service_fee


def listing_was_price(price: float) -> float:
    return price + LISTING_MARKUP


def taxi_fare(base_fare: float, price_per_km: float, km: float) -> float:
    if km < 0:
        raise ValueError("distance must not be negative")
    return base_fare + price_per_km * km


@dataclass(frozen=True)
class BookingStats:
    total_revenue: float
    total_bookings: int
    pending_requests: int


def booking_stats(bookings: Iterable[Booking]) -> BookingStats:
    rows = list(bookings)
    return BookingStats(
        total_revenue=sum(b.amount or 0 for b in rows),
        total_bookings=len(rows),
        pending_requests=sum(1 for b in rows if b.status_key == "pending"),
    )


def money(value: float | int | None) -> str:
    """$1,234 for whole amounts, $1,234.50 otherwise."""
    amount = float(value or 0)
    if not math.isfinite(amount):
        amount = 0
    if amount == int(amount):
        return f"${int(amount):,}"
    return f"${amount:,.2f}"
