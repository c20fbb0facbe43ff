"""Admin managers for catalog content: packages, hotels, homestays, taxis and blog posts.

All five share one shape (list, create, edit, delete, back to list), so each
is described by a ``Manager`` and served by the same handlers.
"""
import logging
from dataclasses import dataclass, field
from typing import Callable

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import RedirectResponse
from pydantic import ValidationError

from wanderlust.dependencies import FormInput, get_api, get_form, get_session, require_admin, validation_messages
from wanderlust.schemas import BlogForm, PackageForm, StayForm, TaxiForm, TaxiType, User
from wanderlust.schemas.catalog import PACKAGE_CATEGORIES
from wanderlust.services import resources
from wanderlust.services.api_client import ApiClient, ApiError
from wanderlust.services.session import Session
from wanderlust.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


@dataclass(frozen=True)
class FormField:
    name: str
    label: str
    kind: str = "text"  # text | number | textarea | lines | select | image
    options: tuple = ()
    required: bool = False
    step: str = "any"


@dataclass(frozen=True)
class Manager:
    slug: str
    noun: str
    title: str
    resource: resources.Resource
    form: type
    fields: tuple
    columns: tuple  # (header, attribute)
    payload: Callable = field(default=lambda form: form.to_payload())

    def form_values(self, record) -> dict:
        if record is None:
            return {}
        out = {}
        for f in self.fields:
            value = getattr(record, f.name, "")
            out[f.name] = "\n".join(str(v) for v in value) if isinstance(value, list) else value
            if f.name == "tags" and isinstance(value, list):
                out[f.name] = ", ".join(value)
        return out


_STAY_FIELDS = (
    FormField("name", "Name"),
    FormField("location", "Location"),
    FormField("price_per_night", "Price per Night ($)", "number"),
    FormField("rating", "Rating", "number"),
    FormField("reviews", "Reviews", "number", step="1"),
    FormField("description", "Description", "textarea"),
    FormField("image", "Cover Image", "image"),
    FormField("images", "Gallery Image URLs (one per line)", "lines"),
    FormField("amenities", "Amenities (one per line)", "lines"),
)

MANAGERS = {
    m.slug: m
    for m in (
        Manager(
            slug="packages",
            noun="package",
            title="Tour Packages",
            resource=resources.packages,
            form=PackageForm,
            fields=(
                FormField("title", "Package Title"),
                FormField("location", "Location"),
                FormField("price", "Price ($)", "number"),
                FormField("days", "Duration (Days)", "number", step="1"),
                FormField("category", "Category", "select", options=tuple(PACKAGE_CATEGORIES)),
                FormField("rating", "Rating", "number"),
                FormField("reviews_count", "Reviews", "number", step="1"),
                FormField("description", "Description", "textarea"),
                FormField("image", "Cover Image", "image"),
                FormField("images", "Gallery Image URLs (one per line)", "lines"),
                FormField("itinerary", "Itinerary (one day per line)", "lines"),
                FormField("highlights", "Highlights (one per line)", "lines"),
                FormField("included", "Included (one per line)", "lines"),
                FormField("excluded", "Excluded (one per line)", "lines"),
                FormField("policies", "Policies (one per line)", "lines"),
            ),
            columns=(("Package", "title"), ("Location", "location"), ("Price", "price"), ("Days", "duration")),
        ),
        Manager(
            slug="hotels",
            noun="hotel",
            title="Hotels",
            resource=resources.hotels,
            form=StayForm,
            fields=_STAY_FIELDS,
            columns=(("Hotel", "name"), ("Location", "location"), ("Price / Night", "price_per_night"),
                     ("Rating", "rating")),
            payload=lambda form: form.to_payload("New Hotel"),
        ),
        Manager(
            slug="homestays",
            noun="homestay",
            title="Homestays",
            resource=resources.homestays,
            form=StayForm,
            fields=_STAY_FIELDS,
            columns=(("Homestay", "name"), ("Location", "location"), ("Price / Night", "price_per_night"),
                     ("Rating", "rating")),
            payload=lambda form: form.to_payload("New Homestay"),
        ),
        Manager(
            slug="taxis",
            noun="taxi",
            title="Taxi Fleet",
            resource=resources.taxis,
            form=TaxiForm,
            fields=(
                FormField("name", "Vehicle Name"),
                FormField("type", "Type", "select", options=tuple(t.value for t in TaxiType)),
                FormField("price_per_km", "Price per Km ($)", "number"),
                FormField("base_fare", "Base Fare ($)", "number"),
                FormField("capacity", "Capacity", "number", step="1"),
                FormField("image", "Vehicle Image", "image"),
                FormField("features", "Features (one per line)", "lines"),
            ),
            columns=(("Vehicle", "name"), ("Type", "type"), ("Base Fare", "base_fare"), ("Capacity", "capacity")),
        ),
        Manager(
            slug="blogs",
            noun="post",
            title="Blog Posts",
            resource=resources.blogs,
            form=BlogForm,
            fields=(
                FormField("title", "Post Title", required=True),
                FormField("category", "Category"),
                FormField("author", "Author"),
                FormField("excerpt", "Excerpt", "textarea"),
                FormField("content", "Content (HTML allowed)", "textarea"),
                FormField("image", "Featured Image", "image"),
                FormField("tags", "Tags (comma separated)"),
            ),
            columns=(("Title", "title"), ("Category", "category"), ("Author", "author"), ("Date", "display_date")),
        ),
    )
}


def get_manager(slug: str) -> Manager:
    manager = MANAGERS.get(slug)
    if manager is None:
        raise HTTPException(status_code=404, detail="Page not found")
    return manager


def _form_page(request: Request, manager: Manager, mode: str, values: dict, errors: list, item_id=None, status_code=200):
    return render(
        request,
        "admin/manager_form.html",
        status_code=status_code,
        manager=manager,
        mode=mode,
        values=values,
        errors=errors,
        item_id=item_id,
        active=manager.slug,
    )


@router.get("/{slug}")
def manager_list(
    request: Request,
    manager: Manager = Depends(get_manager),
    admin: User = Depends(require_admin),
    api: ApiClient = Depends(get_api),
):
    items = resources.list_or_empty(manager.resource, api)
    return render(request, "admin/manager_list.html", manager=manager, items=items, active=manager.slug)


@router.get("/{slug}/new")
def manager_new(request: Request, manager: Manager = Depends(get_manager), admin: User = Depends(require_admin)):
    return _form_page(request, manager, "create", {}, [])


@router.get("/{slug}/{item_id}/edit")
def manager_edit(
    request: Request,
    item_id: str,
    manager: Manager = Depends(get_manager),
    admin: User = Depends(require_admin),
    api: ApiClient = Depends(get_api),
):
    record = resources.get_or_none(manager.resource, api, item_id)
    if record is None:
        raise HTTPException(status_code=404, detail=f"{manager.noun.capitalize()} not found")
    return _form_page(request, manager, "edit", manager.form_values(record), [], item_id=item_id)


def _save(request: Request, manager: Manager, fields: FormInput, api: ApiClient, session: Session, item_id=None):
    mode = "edit" if item_id else "create"
    values = dict(fields.fields)
    upload = fields.files.get("image_file")
    try:
        form = manager.form.model_validate(values)
    except ValidationError as e:
        return _form_page(request, manager, mode, values, validation_messages(e), item_id, 400)
    try:
        if mode == "create" and manager.slug == "packages":
            manager.resource.create(api, manager.payload(form), image_file=upload)
        else:
            payload = manager.payload(form)
            if upload:
                payload["image"] = api.upload(*upload)
            if mode == "create":
                manager.resource.create(api, payload)
            else:
                manager.resource.update(api, item_id, payload)
    except ApiError as e:
        logger.warning("Saving %s failed: %s", manager.noun, e.message)
        return _form_page(
            request, manager, mode, values, [f"Failed to save {manager.noun}: {e.message}"], item_id, 502
        )
    session.flash(f"{manager.noun.capitalize()} saved.", "success")
    return RedirectResponse(f"/admin/{manager.slug}", status_code=303)


@router.post("/{slug}/new")
def manager_create(
    request: Request,
    manager: Manager = Depends(get_manager),
    admin: User = Depends(require_admin),
    fields: FormInput = Depends(get_form),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    return _save(request, manager, fields, api, session)


@router.post("/{slug}/{item_id}/edit")
def manager_update(
    request: Request,
    item_id: str,
    manager: Manager = Depends(get_manager),
    admin: User = Depends(require_admin),
    fields: FormInput = Depends(get_form),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    return _save(request, manager, fields, api, session, item_id=item_id)


@router.post("/{slug}/{item_id}/delete")
def manager_delete(
    item_id: str,
    manager: Manager = Depends(get_manager),
    admin: User = Depends(require_admin),
    api: ApiClient = Depends(get_api),
    session: Session = Depends(get_session),
):
    try:
        manager.resource.delete(api, item_id)
    except ApiError as e:
        logger.warning("Deleting %s %s failed: %s", manager.noun, item_id, e.message)
        session.flash(f"Failed to delete {manager.noun}: {e.message}", "error")
    else:
        session.flash(f"{manager.noun.capitalize()} deleted.", "success")
    return RedirectResponse(f"/admin/{manager.slug}", status_code=303)
