"""Tests for environment-driven settings and demo seeding."""

from facility_reservations.config import load_settings
from facility_reservations.domain.models import Weekday
from facility_reservations.repos.memory import create_facility_repository


def test_defaults(monkeypatch):
    for name in ("APP_TITLE", "LOG_LEVEL", "ADMIN_ROLE", "SEED_DEMO_DATA"):
        monkeypatch.delenv(name, raising=False)
    settings = load_settings()
    assert settings.log_level == "INFO"
    assert settings.admin_role == "admin"
    assert settings.seed_demo_data is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ADMIN_ROLE", "staff")
    monkeypatch.setenv("SEED_DEMO_DATA", "yes")
    settings = load_settings()
    assert settings.log_level == "DEBUG"
    assert settings.admin_role == "staff"
    assert settings.seed_demo_data is True


def test_seeded_facilities():
    assert create_facility_repository().list_all() == []

    seeded = create_facility_repository(seed=True).list_all()
    assert len(seeded) == 3
    hall = next(f for f in seeded if f.name == "Function Hall")
    assert hall.availability.start_day == Weekday.FRIDAY
    assert hall.availability.end_day == Weekday.MONDAY
