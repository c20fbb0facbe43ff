"""Typed access to the backend's REST resources."""
from __future__ import annotations

import json
import logging
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from wanderlust.schemas import BlogPost, Booking, Homestay, Hotel, Package, SiteSettings, TaxiOption, User
from wanderlust.services.api_client import ApiClient, ApiError, unwrap_item, unwrap_list

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class Resource(Generic[T]):
    """One REST collection: `GET/POST <path>`, `GET/PUT/DELETE <path>/<id>`."""

    def __init__(self, path: str, model: type[T], plural: str, singular: str):
        self.path = path
        self.model = model
        self.plural = plural
        self.singular = singular

    def _parse(self, raw: dict) -> T | None:
        try:
            return self.model.model_validate(raw)
        except ValidationError as e:
            # One malformed row must not blank out a whole listing
            logger.warning("Skipping malformed %s record: %s", self.singular, e)
            return None

    def list(self, api: ApiClient, params: dict | None = None) -> list[T]:
        rows = unwrap_list(api.get(self.path, params=params), self.plural)
        return [r for r in (self._parse(row) for row in rows if isinstance(row, dict)) if r is not None]

    def get(self, api: ApiClient, item_id: str) -> T | None:
        raw = unwrap_item(api.get(f"{self.path}/{item_id}"), self.singular)
        return self._parse(raw) if raw else None

    def create(self, api: ApiClient, payload: dict) -> T | None:
        raw = unwrap_item(api.post(self.path, json=payload), self.singular)
        return self._parse(raw) if raw else None

    def update(self, api: ApiClient, item_id: str, payload: dict) -> T | None:
        raw = unwrap_item(api.put(f"{self.path}/{item_id}", json=payload), self.singular)
        return self._parse(raw) if raw else None

    def delete(self, api: ApiClient, item_id: str) -> None:
        api.delete(f"{self.path}/{item_id}")


class PackageResource(Resource[Package]):
    def create(self, api: ApiClient, payload: dict, image_file: tuple | None = None) -> Package | None:
        """New packages go up as multipart so the cover image can ride along with the record."""
        data = {
            "title": str(payload.get("title", "New Package")),
            "location": str(payload.get("location", "Unknown")),
            "price": str(payload.get("price", 0)),
            "days": str(payload.get("days", 1)),
            "description": str(payload.get("description", "")),
            "category": str(payload.get("category", "Adventure")),
            "rating": str(payload.get("rating", 0)),
            "reviewsCount": str(payload.get("reviewsCount", 0)),
            "itinerary": json.dumps(payload.get("itinerary", [])),
        }
        for key in ("highlights", "included", "excluded", "policies", "images"):
            if payload.get(key):
                data[key] = json.dumps(payload[key])
        if not image_file and payload.get("image"):
            data["image"] = payload["image"]
        # (None, value) parts keep the body multipart even without a file
        files = {key: (None, value) for key, value in data.items()}
        if image_file:
            files["image"] = image_file
        raw = unwrap_item(api.post(self.path, files=files), self.singular)
        return self._parse(raw) if raw else None


packages = PackageResource("/packages", Package, "packages", "package")
hotels = Resource("/hotels", Hotel, "hotels", "hotel")
homestays = Resource("/homestays", Homestay, "homestays", "homestay")
taxis = Resource("/taxis", TaxiOption, "taxis", "taxi")
blogs = Resource("/blogs", BlogPost, "blogs", "blog")
bookings = Resource("/bookings", Booking, "bookings", "booking")
users = Resource("/users", User, "users", "user")


def get_site_settings(api: ApiClient) -> SiteSettings:
    data = api.get("/settings")
    # An unsaved settings row comes back without an id; keep the defaults then
    if isinstance(data, dict) and data.get("id"):
        return SiteSettings.model_validate(data)
    return SiteSettings()


def save_site_settings(api: ApiClient, payload: dict) -> None:
    api.put("/settings", json=payload)


def list_or_empty(resource: Resource[T], api: ApiClient, params: dict | None = None) -> list[T]:
    """Read pages render an empty list when the backend call fails."""
    try:
        return resource.list(api, params=params)
    except ApiError as e:
        logger.warning("Error fetching %s: %s", resource.plural, e.message)
        return []


def get_or_none(resource: Resource[T], api: ApiClient, item_id: str) -> T | None:
    try:
        return resource.get(api, item_id)
    except ApiError as e:
        if not e.not_found:
            logger.warning("Error fetching %s %s: %s", resource.singular, item_id, e.message)
        return None
