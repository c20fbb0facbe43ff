"""Tour packages: listing with filters, and the detail page."""
from fastapi import APIRouter, Depends, HTTPException, Query, Request

from wanderlust.config import get_settings
from wanderlust.dependencies import get_api
from wanderlust.schemas.catalog import PACKAGE_CATEGORIES
from wanderlust.services import resources
from wanderlust.services.api_client import ApiClient
from wanderlust.services.content import DURATION_BUCKETS
from wanderlust.services.listing import (
    PRICE_DEFAULT,
    PRICE_MAX,
    PRICE_MIN,
    SORT_OPTIONS,
    filter_packages,
    sort_packages,
)
from wanderlust.services.pricing import listing_was_price, package_estimate
from wanderlust.templating import render

router = APIRouter(tags=["packages"])


@router.get("/packages")
def package_listing(
    request: Request,
    max_price: int | None = Query(None, ge=0),
    category: list[str] = Query([]),
    duration: list[str] = Query([]),
    sort: str | None = Query(None),
    api: ApiClient = Depends(get_api),
):
    packages = resources.list_or_empty(resources.packages, api)
    # No price cap until the visitor applies the filters
    shown = filter_packages(packages, max_price=max_price, categories=category, durations=duration)
    shown = sort_packages(shown, sort)
    return render(
        request,
        "packages/list.html",
        packages=shown,
        was_price=listing_was_price,
        categories=PACKAGE_CATEGORIES,
        durations=list(DURATION_BUCKETS),
        sort_options=SORT_OPTIONS,
        selected={"max_price": max_price or PRICE_DEFAULT, "category": category, "duration": duration, "sort": sort},
        price_min=PRICE_MIN,
        price_max=PRICE_MAX,
    )


@router.get("/package/{package_id}")
def package_details(request: Request, package_id: str, api: ApiClient = Depends(get_api)):
    pkg = resources.get_or_none(resources.packages, api, package_id)
    if pkg is None:
        raise HTTPException(status_code=404, detail="Package not found")
    fee = get_settings().package_service_fee
    return render(
        request,
        "packages/detail.html",
        pkg=pkg,
        estimate=package_estimate(pkg.price, fee),
        service_fee=fee,
    )
