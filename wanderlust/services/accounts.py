"""Profile updates for the signed-in user."""
from wanderlust.schemas import ProfileForm, User
from wanderlust.services import resources
from wanderlust.services.api_client import ApiClient
from wanderlust.services.session import Session


def update_profile(api: ApiClient, session: Session, user: User, form: ProfileForm) -> None:
    """PUT /users/<id>, then refresh the cached user (the password never lands in the session)."""
    payload = form.to_payload()
    resources.users.update(api, user.id, payload)
    cached = dict(session.user or {})
    cached.update({k: v for k, v in payload.items() if k != "password"})
    session.remember_user(cached)
