"""Tests for application configuration."""

import pytest
from pydantic import ValidationError

from app.core.config import Settings, get_settings


def test_settings_has_defaults():
    """Settings should have sensible defaults."""
    settings = Settings()

    assert settings.app_name == "EnrollmentDash"
    assert settings.app_env == "development"
    assert settings.debug is False
    assert settings.log_level == "INFO"
    assert settings.log_format == "json"


def test_dashboard_defaults():
    """Label thresholds and top-N limits match the dashboard layout."""
    settings = Settings()

    assert settings.label_max_length == 20
    assert settings.course_label_max_length == 25
    assert settings.top_level_courses == 10
    assert settings.top_sources == 8
    assert settings.top_source_courses == 15
    assert settings.top_staff_courses == 8


def test_export_defaults():
    settings = Settings()

    assert settings.export_base_name == "student-enrollment-report"
    assert settings.export_staff_join == "full"


def test_settings_is_development_property():
    """is_development should return True for development env."""
    settings = Settings(app_env="development")
    assert settings.is_development is True
    assert settings.is_production is False


def test_settings_is_testing_property():
    settings = Settings(app_env="testing")
    assert settings.is_testing is True
    assert settings.is_development is False


def test_get_settings_returns_singleton():
    """get_settings should return cached singleton."""
    assert get_settings() is get_settings()


def test_settings_from_environment(monkeypatch):
    """Settings should load from environment variables."""
    monkeypatch.setenv("EXPORT_DIR", "/tmp/reports")
    monkeypatch.setenv("EXPORT_STAFF_JOIN", "left")
    monkeypatch.setenv("TOP_SOURCES", "5")

    settings = Settings()

    assert settings.export_dir == "/tmp/reports"
    assert settings.export_staff_join == "left"
    assert settings.top_sources == 5


@pytest.mark.parametrize("field", ["label_max_length", "top_level_courses", "top_staff_courses"])
def test_limits_must_be_positive(field):
    with pytest.raises(ValidationError):
        Settings(**{field: 0})


@pytest.mark.parametrize("base_name", ["", "reports/weekly", "..\\weekly"])
def test_export_base_name_rejects_paths(base_name):
    with pytest.raises(ValidationError):
        Settings(export_base_name=base_name)


def test_unknown_staff_join_rejected():
    with pytest.raises(ValidationError):
        Settings(export_staff_join="inner")


def test_server_binding_is_left_to_uvicorn():
    """Host and port come from the uvicorn command line, not Settings."""
    assert "api_host" not in Settings.model_fields
    assert "api_port" not in Settings.model_fields
