"""Hotels and homestays share one page shape: listing and detail with a date picker."""
from fastapi import APIRouter, Depends, HTTPException, Request

from wanderlust.dependencies import get_api
from wanderlust.schemas import ServiceType
from wanderlust.services import resources
from wanderlust.services.api_client import ApiClient
from wanderlust.templating import render

router = APIRouter(tags=["stays"])


@router.get("/hotels")
def hotel_listing(request: Request, api: ApiClient = Depends(get_api)):
    hotels = resources.list_or_empty(resources.hotels, api)
    return render(request, "stays/list.html", stays=hotels, kind="hotel", title="Find Your Perfect Stay")


@router.get("/hotel/{hotel_id}")
def hotel_details(request: Request, hotel_id: str, api: ApiClient = Depends(get_api)):
    hotel = resources.get_or_none(resources.hotels, api, hotel_id)
    if hotel is None:
        raise HTTPException(status_code=404, detail="Hotel not found")
    return render(request, "stays/detail.html", stay=hotel, kind="hotel", service_type=ServiceType.hotel.value)


@router.get("/homestays")
def homestay_listing(request: Request, api: ApiClient = Depends(get_api)):
    homestays = resources.list_or_empty(resources.homestays, api)
    return render(request, "stays/list.html", stays=homestays, kind="homestay", title="Cozy Homestays")


@router.get("/homestay/{homestay_id}")
def homestay_details(request: Request, homestay_id: str, api: ApiClient = Depends(get_api)):
    homestay = resources.get_or_none(resources.homestays, api, homestay_id)
    if homestay is None:
        raise HTTPException(status_code=404, detail="Homestay not found")
    return render(
        request, "stays/detail.html", stay=homestay, kind="homestay", service_type=ServiceType.homestay.value
    )
