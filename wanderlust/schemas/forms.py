"""Admin manager forms.

Each form mirrors the fields the manager page displays and fills in the
defaults the back-office applies before saving a record.
"""
from pydantic import Field, field_validator

from wanderlust.schemas.base import FormModel, lines
from wanderlust.schemas.catalog import TaxiType

DEFAULT_PACKAGE_IMAGE = "https://picsum.photos/800/600"
DEFAULT_TAXI_IMAGE = "https://picsum.photos/400/250"


class PackageForm(FormModel):
    title: str = ""
    location: str = ""
    price: float = Field(0, ge=0, allow_inf_nan=False)
    days: int = Field(1, ge=0)
    rating: float = Field(0, ge=0, le=5, allow_inf_nan=False)
    reviews_count: int = Field(0, ge=0)
    category: str = ""
    description: str = ""
    image: str = ""
    images: list[str] = []
    itinerary: list[str] = []
    highlights: list[str] = []
    included: list[str] = []
    excluded: list[str] = []
    policies: list[str] = []

    @field_validator("images", "itinerary", "highlights", "included", "excluded", "policies", mode="before")
    @classmethod
    def split_lines(cls, v):
        return lines(v)

    def to_payload(self) -> dict:
        return {
            "title": self.title or "New Package",
            "location": self.location or "Unknown",
            "price": self.price or 0,
            "days": self.days or 1,
            "rating": self.rating or 0,
            "reviewsCount": self.reviews_count or 0,
            "category": self.category or "Adventure",
            "description": self.description,
            "image": self.image or DEFAULT_PACKAGE_IMAGE,
            "images": self.images,
            "itinerary": self.itinerary,
            "highlights": self.highlights,
            "included": self.included,
            "excluded": self.excluded,
            "policies": self.policies,
        }


class StayForm(FormModel):
    name: str = ""
    location: str = ""
    price_per_night: float = Field(0, ge=0, allow_inf_nan=False)
    rating: float = Field(0, ge=0, le=5, allow_inf_nan=False)
    reviews: int = Field(0, ge=0)
    description: str = ""
    image: str = ""
    images: list[str] = []
    amenities: list[str] = []

    @field_validator("images", "amenities", mode="before")
    @classmethod
    def split_lines(cls, v):
        return lines(v)

    def to_payload(self, default_name: str) -> dict:
        return {
            "name": self.name or default_name,
            "location": self.location or "Unknown",
            "pricePerNight": self.price_per_night or 0,
            "rating": self.rating or 0,
            "reviews": self.reviews or 0,
            "description": self.description,
            "image": self.image or DEFAULT_PACKAGE_IMAGE,
            "images": self.images,
            "amenities": self.amenities,
        }


class TaxiForm(FormModel):
    name: str = ""
    type: TaxiType = TaxiType.sedan
    price_per_km: float = Field(0, ge=0, allow_inf_nan=False)
    base_fare: float = Field(0, ge=0, allow_inf_nan=False)
    capacity: int = Field(4, ge=1)
    image: str = ""
    features: list[str] = []

    @field_validator("features", mode="before")
    @classmethod
    def split_lines(cls, v):
        return lines(v)

    def to_payload(self) -> dict:
        return {
            "name": self.name or "New Taxi",
            "type": self.type.value,
            "pricePerKm": self.price_per_km or 0,
            "baseFare": self.base_fare or 0,
            "capacity": self.capacity or 4,
            "image": self.image or DEFAULT_TAXI_IMAGE,
            "features": self.features,
        }


class BlogForm(FormModel):
    title: str = Field(..., min_length=1)
    category: str = ""
    author: str = ""
    excerpt: str = ""
    content: str = ""
    image: str = ""
    tags: list[str] = []

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        # Tags are typed comma separated
        return [t.strip() for item in lines(v) for t in item.split(",") if t.strip()]

    def to_payload(self) -> dict:
        return {
            "title": self.title,
            "category": self.category,
            "author": self.author,
            "excerpt": self.excerpt,
            "content": self.content,
            "image": self.image or DEFAULT_PACKAGE_IMAGE,
            "tags": self.tags,
        }
