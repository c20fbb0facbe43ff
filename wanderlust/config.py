"""Application configuration from environment."""
from pathlib import Path

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache

# Load .env from project root (parent of wanderlust/) so env vars are available everywhere
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


class Settings(BaseSettings):
    app_name: str = "Wanderlust"
    app_env: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # REST backend; static uploads are served from the origin of this URL
    api_url: str = "http://localhost:5000/api"
    api_timeout_seconds: float = 15.0

    @field_validator("api_url", mode="before")
    @classmethod
    def strip_api_url(cls, v: str) -> str:
        return (v or "").strip().rstrip("/")

    secret_key: str = "change-me"
    session_cookie_name: str = "wanderlust_session"
    session_algorithm: str = "HS256"
    session_max_age_minutes: int = 60 * 24 * 7

    @field_validator("secret_key")
    @classmethod
    def strip_secret(cls, v: str) -> str:
        return (v or "").strip()

    tax_rate: float = 0.05
    package_service_fee: float = 50.0

    class Config:
        env_file = str(_env_path)
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()
