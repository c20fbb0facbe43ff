from wanderlust.schemas.auth import LoginForm, ProfileForm, SignupForm, User, UserRole
from wanderlust.schemas.booking import (
    Booking,
    BookingRequest,
    BookingStatus,
    PaymentStatus,
    ServiceType,
    TripEnquiry,
)
from wanderlust.schemas.catalog import BlogPost, Homestay, Hotel, Package, TaxiOption, TaxiType
from wanderlust.schemas.content import FAQ, ContactForm, Notification, SettingsForm, SiteSettings, SupportTicket
from wanderlust.schemas.forms import BlogForm, PackageForm, StayForm, TaxiForm
