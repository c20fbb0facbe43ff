"""Editorial content that does not come from the backend."""
from wanderlust.schemas import FAQ, Notification, SupportTicket

TOP_DESTINATIONS = ["Bali", "Paris", "Switzerland", "Dubai", "Thailand", "Goa", "Ladakh", "Maldives"]

HERO_SLIDES = [
    {"title": "Discover the Himalayas", "subtitle": "Treks, temples and mountain villages"},
    {"title": "Tropical Escapes", "subtitle": "Beaches, reefs and island sunsets"},
    {"title": "Cultural Journeys", "subtitle": "Ancient cities and living traditions"},
]

DURATION_BUCKETS = {
    "1-3": (1, 3),
    "4-7": (4, 7),
    "8-14": (8, 14),
    "15+": (15, None),
}

FAQS = [
    FAQ(
        question="How do I cancel my booking?",
        answer='You can cancel your booking from the "My Bookings" section in your dashboard. '
        "Cancellation fees may apply depending on the policy.",
        category="Booking",
    ),
    FAQ(
        question="Is travel insurance included?",
        answer='Basic travel insurance is included in some packages. Please check the "Inclusions" tab '
        "on the package details page.",
        category="Insurance",
    ),
    FAQ(
        question="Can I customize a tour package?",
        answer="Yes! You can contact our support team to request a customized itinerary based on your preferences.",
        category="Packages",
    ),
    FAQ(
        question="What payment methods do you accept?",
        answer="We accept Credit/Debit cards, Net Banking, UPI, and major international wallets.",
        category="Payment",
    ),
]

TICKETS = [
    SupportTicket(id="TICK-2839", subject="Refund request for Booking #B004", status="In Progress",
                  date="2024-01-06", last_update="2 hours ago"),
    SupportTicket(id="TICK-1122", subject="Issue with hotel check-in", status="Closed",
                  date="2023-11-01", last_update="Nov 02, 2023"),
]

NOTIFICATIONS = [
    Notification(id="n1", title="Booking Confirmed", message="Your booking has been confirmed.",
                 date="2 hours ago", read=False),
    Notification(id="n2", title="Payment Received", message="We received your payment.",
                 date="2 hours ago", read=False),
    Notification(id="n3", title="New Offer Alert", message="Get 20% off on Bali packages this weekend!",
                 date="1 day ago", read=True),
]


def search_faqs(query: str | None) -> list[FAQ]:
    q = (query or "").strip().lower()
    if not q:
        return list(FAQS)
    return [f for f in FAQS if q in f.question.lower() or q in f.answer.lower() or q in f.category.lower()]
