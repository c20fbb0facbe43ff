"""Support content, notifications and site-wide settings."""
from wanderlust.schemas.base import FormModel, Record


class SupportTicket(Record):
    id: str
    subject: str
    status: str  # Open | Closed | In Progress
    date: str
    last_update: str


class FAQ(Record):
    question: str
    answer: str
    category: str


class Notification(Record):
    id: str
    title: str
    message: str
    date: str
    read: bool = False


class SiteSettings(Record):
    id: str | None = None
    site_name: str = "Wanderlust"
    logo: str = ""
    favicon: str = ""


class SettingsForm(FormModel):
    site_name: str = "Wanderlust"
    logo: str = ""
    favicon: str = ""

    def to_payload(self) -> dict:
        return {"siteName": self.site_name or "Wanderlust", "logo": self.logo, "favicon": self.favicon}


class ContactForm(FormModel):
    name: str = ""
    email: str = ""
    subject: str = ""
    message: str = ""
