"""Filtering and sorting for the package listing sidebar."""
from __future__ import annotations

from typing import Iterable

from wanderlust.schemas import Package
from wanderlust.services.content import DURATION_BUCKETS

PRICE_MIN = 500
PRICE_MAX = 5000
PRICE_DEFAULT = 2000

SORT_OPTIONS = {
    "popularity": "Popularity",
    "price_asc": "Price: Low to High",
    "price_desc": "Price: High to Low",
    "duration": "Duration",
}


def _in_bucket(days: int, bucket: str) -> bool:
    bounds = DURATION_BUCKETS.get(bucket)
    if bounds is None:
        return False
    low, high = bounds
    return days >= low and (high is None or days <= high)


def filter_packages(
    packages: Iterable[Package],
    max_price: float | None = None,
    categories: Iterable[str] = (),
    durations: Iterable[str] = (),
) -> list[Package]:
    cats = {c.lower() for c in categories if c}
    buckets = [d for d in durations if d in DURATION_BUCKETS]
    out = []
    for pkg in packages:
        if max_price is not None and pkg.price > max_price:
            continue
        if cats and (pkg.category or "").lower() not in cats:
            continue
        if buckets and not any(_in_bucket(pkg.duration, b) for b in buckets):
            continue
        out.append(pkg)
    return out


def sort_packages(packages: list[Package], sort: str | None) -> list[Package]:
    if sort == "price_asc":
        return sorted(packages, key=lambda p: p.price)
    if sort == "price_desc":
        return sorted(packages, key=lambda p: p.price, reverse=True)
    if sort == "duration":
        return sorted(packages, key=lambda p: p.duration)
    if sort == "popularity":
        return sorted(packages, key=lambda p: (p.reviews_count, p.rating), reverse=True)
    return list(packages)
