# /intake/config/settings.py

import sys
from typing import Literal
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

DEFAULT_SESSION_SECRET = "00000000-0000-0000-0000-000000000000"


class Settings(BaseSettings):
    # App Behavior
    environment: str = "production"
    api_version: str = "v1"
    workers: int = 4

    # Sessions
    session_type: Literal["memory", "redis"] = "memory"
    session_secret_key: str = DEFAULT_SESSION_SECRET
    session_cookie_name: str = "__intake_session"
    session_cookie_same_site: Literal["lax", "strict", "none"] = "strict"
    session_cookie_secure: bool = True
    session_expires_seconds: int = Field(default=3600, ge=0)
    session_key_prefix: str = "SESSION:"

    # Redis
    redis_url: str = "redis://localhost:6379"

    # Workflow
    flow_id_query_param: str = "tid"
    default_redirect_route_id: str = "PROT-0001"

    # Security
    api_key: str | None = None
    cors_allowed_origins: str = ""
    allowed_hosts: str = "*"

    # ---------------- Validators ---------------- #

    @field_validator("session_secret_key")
    @classmethod
    def key_length_must_be_sufficient(cls, v):
        if len(v) < 32:
            raise ValueError("Session secret key must be at least 32 characters long")
        return v

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


def validate_environment(settings_obj: Settings):
    try:
        if settings_obj.environment == "production":
            if settings_obj.session_secret_key == DEFAULT_SESSION_SECRET:
                raise ValueError("SESSION_SECRET_KEY must be set in production")
            if not settings_obj.session_cookie_secure:
                raise ValueError("SESSION_COOKIE_SECURE must be enabled in production")

        return settings_obj

    except ValueError as e:
        print(f"--- [ERROR] Environment validation failed: {e}")
        sys.exit(1)


settings = Settings()
validate_environment(settings)
