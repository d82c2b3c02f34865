"""Runtime settings, read from environment variables."""

from __future__ import annotations

import os

from pydantic import BaseModel

_TRUTHY = {"1", "true", "yes", "on"}


class Settings(BaseModel):
    app_title: str = "Facility Reservation Service"
    log_level: str = "INFO"
    admin_role: str = "admin"
    seed_demo_data: bool = False


def load_settings() -> Settings:
    return Settings(
        app_title=os.getenv("APP_TITLE", "Facility Reservation Service"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        admin_role=os.getenv("ADMIN_ROLE", "admin"),
        seed_demo_data=os.getenv("SEED_DEMO_DATA", "").lower() in _TRUTHY,
    )
