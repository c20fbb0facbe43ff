"""Home page, support centre and health check."""
import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import RedirectResponse

from wanderlust.dependencies import FormInput, get_api, get_form, get_session
from wanderlust.schemas import ContactForm
from wanderlust.schemas.catalog import PACKAGE_CATEGORIES
from wanderlust.services import resources
from wanderlust.services.api_client import ApiClient
from wanderlust.services.content import HERO_SLIDES, TICKETS, TOP_DESTINATIONS, search_faqs
from wanderlust.services.session import Session
from wanderlust.templating import render

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pages"])

SUPPORT_TABS = ("faq", "tickets", "contact")


@router.get("/")
def home(request: Request, api: ApiClient = Depends(get_api)):
    trending = resources.list_or_empty(resources.packages, api)[:3]
    tips = resources.list_or_empty(resources.blogs, api)[:3]
    return render(
        request,
        "home.html",
        slides=HERO_SLIDES,
        trending=trending,
        destinations=TOP_DESTINATIONS,
        categories=PACKAGE_CATEGORIES,
        tips=tips,
    )


@router.get("/support")
def support(request: Request, tab: str = Query("faq"), q: str | None = Query(None)):
    if tab not in SUPPORT_TABS:
        tab = "faq"
    return render(request, "support.html", tab=tab, q=q or "", faqs=search_faqs(q), tickets=TICKETS)


@router.post("/support/contact")
def support_contact(fields: FormInput = Depends(get_form), session: Session = Depends(get_session)):
    form = ContactForm.model_validate(fields.fields)
    if not form.email or not form.message:
        session.flash("Please add your email and a message.", "error")
        return RedirectResponse("/support?tab=contact", status_code=303)
    logger.info("Support message from %s: %s", form.email, form.subject or "(no subject)")
    session.flash("Thanks for reaching out! Our team will get back to you shortly.", "success")
    return RedirectResponse("/support?tab=contact", status_code=303)


@router.get("/health")
def health():
    return {"status": "healthy"}
