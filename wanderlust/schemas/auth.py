"""Users and the auth/profile forms."""
import enum

from pydantic import Field, model_validator

from wanderlust.schemas.base import FormModel, Record


class UserRole(str, enum.Enum):
    user = "user"
    admin = "admin"


class User(Record):
    id: str = ""
    name: str = ""
    email: str = ""
    phone: str | None = ""
    role: str = UserRole.user.value
    avatar: str | None = ""

    @property
    def is_admin(self) -> bool:
        # The API answers "ADMIN" where the record type says "admin"
        return (self.role or "").strip().lower() == UserRole.admin.value

    @property
    def initials(self) -> str:
        parts = [p for p in (self.name or "").split() if p]
        return "".join(p[0] for p in parts[:2]).upper() or "?"


class LoginForm(FormModel):
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class SignupForm(FormModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=1)
    phone: str = ""
    password: str = Field(..., min_length=1)
    confirm_password: str = ""

    @model_validator(mode="after")
    def passwords_match(self):
        if self.confirm_password != self.password:
            raise ValueError("Passwords do not match")
        return self

    def to_payload(self) -> dict:
        return {"name": self.name, "email": self.email, "phone": self.phone, "password": self.password}


class ProfileForm(FormModel):
    name: str = ""
    email: str = ""
    avatar: str = ""
    current_password: str = ""
    new_password: str = ""
    confirm_password: str = ""

    @model_validator(mode="after")
    def new_passwords_match(self):
        if self.new_password and self.new_password != self.confirm_password:
            raise ValueError("New passwords don't match!")
        return self

    def to_payload(self) -> dict:
        data = {"name": self.name, "email": self.email, "avatar": self.avatar}
        if self.new_password:
            data["password"] = self.new_password
        return data
