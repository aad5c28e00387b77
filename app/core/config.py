"""Application configuration via Pydantic Settings v2."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "EnrollmentDash"
    app_env: Literal["development", "testing", "staging", "production"] = "development"
    debug: bool = False

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # API
    cors_origins: list[str] = [
        "http://localhost:5173",  # Vite dev server (default)
        "http://127.0.0.1:5173",
    ]

    # Export
    export_dir: str = "./artifacts/exports"
    export_base_name: str = "student-enrollment-report"
    export_staff_join: Literal["left", "full"] = "full"

    # Chart labels
    label_max_length: int = 20
    course_label_max_length: int = 25

    # Top-N limits
    top_level_courses: int = 10
    top_sources: int = 8
    top_source_courses: int = 15
    top_staff_courses: int = 8

    @field_validator(
        "label_max_length",
        "course_label_max_length",
        "top_level_courses",
        "top_sources",
        "top_source_courses",
        "top_staff_courses",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Label thresholds and top-N limits must be at least 1."""
        if v < 1:
            raise ValueError(f"Expected a positive integer, got {v}")
        return v

    @field_validator("export_base_name")
    @classmethod
    def validate_base_name(cls, v: str) -> str:
        """Base names end up in file names, so path separators are rejected."""
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Invalid export base name '{v}'")
        return v

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.app_env == "testing"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton."""
    return Settings()
