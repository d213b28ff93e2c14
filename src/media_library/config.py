"""Application settings loaded from the environment."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Media library settings. Every field can be set as ``MEDIA_LIBRARY_<NAME>``."""

    model_config = SettingsConfigDict(env_prefix="MEDIA_LIBRARY_", extra="ignore")

    app_name: str = "Media Library"
    log_level: str = "INFO"
    debug: bool = Field(default=False, description="Record a PipelineTrace per request")

    root_path: str = "/"
    login_path: str = "/login"
    session_cookie: str = "session"

    header_fragment: str = "modules/header"
    footer_fragment: str = "modules/footer"

    # Document pages are public unless this is set
    require_subscriber: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
