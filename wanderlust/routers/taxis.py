"""Taxi fleet with an optional fare estimate."""
from fastapi import APIRouter, Depends, Query, Request

from wanderlust.dependencies import get_api
from wanderlust.schemas import ServiceType
from wanderlust.services import resources
from wanderlust.services.api_client import ApiClient
from wanderlust.services.pricing import taxi_fare
from wanderlust.templating import render

router = APIRouter(tags=["taxis"])


@router.get("/taxi")
def taxi_booking(request: Request, km: float | None = Query(None, ge=0), api: ApiClient = Depends(get_api)):
    taxis = resources.list_or_empty(resources.taxis, api)
    fares = {}
    if km is not None:
        fares = {t.id: taxi_fare(t.base_fare, t.price_per_km, km) for t in taxis}
    return render(request, "taxi.html", taxis=taxis, km=km, fares=fares, service_type=ServiceType.taxi.value)
