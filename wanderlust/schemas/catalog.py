"""Bookable products and blog content."""
import enum

from pydantic import field_validator

from wanderlust.schemas.base import Record, as_list

PACKAGE_CATEGORIES = ["Trekking", "Temple Tour", "Adventure", "Relaxation", "Honeymoon"]


class TaxiType(str, enum.Enum):
    sedan = "Sedan"
    suv = "SUV"
    traveler = "Traveler"


class Package(Record):
    id: str = ""
    title: str = ""
    location: str = ""
    price: float = 0
    rating: float = 0
    reviews_count: int = 0
    days: int = 0
    duration_days: int | None = None
    image: str = ""
    images: list[str] = []
    description: str = ""
    itinerary: list[str] = []
    highlights: list[str] = []
    included: list[str] = []
    excluded: list[str] = []
    policies: list[str] = []
    category: str = ""
    slug: str | None = None

    @field_validator("images", "itinerary", "highlights", "included", "excluded", "policies", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return as_list(v)

    @field_validator("price", "rating", "reviews_count", "days", mode="before")
    @classmethod
    def none_as_zero(cls, v):
        return 0 if v is None or v == "" else v

    @property
    def duration(self) -> int:
        return self.duration_days or self.days


class _Stay(Record):
    id: str = ""
    name: str = ""
    location: str = ""
    price_per_night: float = 0
    rating: float = 0
    reviews: int = 0
    image: str = ""
    images: list[str] = []
    amenities: list[str] = []
    description: str = ""
    slug: str | None = None

    @field_validator("images", "amenities", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return as_list(v)

    @field_validator("price_per_night", "rating", "reviews", mode="before")
    @classmethod
    def none_as_zero(cls, v):
        return 0 if v is None or v == "" else v


class Hotel(_Stay):
    pass


class Homestay(_Stay):
    pass


class TaxiOption(Record):
    id: str = ""
    name: str = ""
    type: str = TaxiType.sedan.value
    image: str = ""
    price_per_km: float = 0
    base_fare: float = 0
    capacity: int = 0
    features: list[str] = []
    slug: str | None = None

    @field_validator("features", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return as_list(v)

    @field_validator("price_per_km", "base_fare", "capacity", mode="before")
    @classmethod
    def none_as_zero(cls, v):
        return 0 if v is None or v == "" else v


class BlogPost(Record):
    id: str = ""
    title: str = ""
    excerpt: str = ""
    content: str = ""
    author: str = ""
    date: str | None = None
    created_at: str | None = None
    image: str = ""
    category: str = ""
    tags: list[str] = []
    slug: str | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return as_list(v)

    @property
    def display_date(self) -> str:
        return self.date or (self.created_at or "")[:10]
