from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SEVERITY_CLASSES = ("K", "A", "B", "O")


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    feed_source: Literal["http", "file"] = "http"
    feed_url: str = (
        "https://transportal.cee.wisc.edu/partners/community-maps/crash/public/crashesKML.do"
    )
    feed_file_path: Path = Path("data/crashes.json")
    feed_timeout_seconds: int = 30
    feed_county: str = "dane"
    feed_start_year: int | None = None
    feed_severity_classes: list[str] = Field(default_factory=lambda: list(SEVERITY_CLASSES))
    feed_date_format: str = "%d/%m/%Y"

    municipality: str = "MADISON"
    municipality_display_name: str = "Madison"
    first_day_of_week: Literal["sunday", "monday"] = "sunday"

    text_max_length: int = Field(default=280, gt=0)

    image_template_path: Path = Path("assets/background.png")
    image_font_path: Path | None = None
    image_font_size: int = Field(default=48, gt=0)
    image_text_color: str = "#FFFFFF"
    image_stroke_width: int = Field(default=0, ge=0)

    publisher: Literal["filesystem", "webhook"] = "filesystem"
    publish_output_dir: Path = Path("output")
    publish_webhook_url: str = ""
    publish_webhook_timeout_seconds: int = 30

    dry_run: bool = False

    @field_validator("feed_severity_classes")
    @classmethod
    def _check_severity_classes(cls, value: list[str]) -> list[str]:
        codes = [code.strip().upper() for code in value]
        if not codes:
            raise ValueError("at least one severity class is required")
        unknown = sorted(set(codes) - set(SEVERITY_CLASSES))
        if unknown:
            raise ValueError(
                f"unknown severity classes {unknown}; choose from {list(SEVERITY_CLASSES)}"
            )
        return codes

    @field_validator("first_day_of_week", "feed_source", "publisher", mode="before")
    @classmethod
    def _lowercase_choice(cls, value: object) -> object:
        return value.lower() if isinstance(value, str) else value
