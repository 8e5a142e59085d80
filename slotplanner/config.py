"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List, Optional

import pendulum
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .domain.models import Availability, TimeInWeek


class TimeInWeekConfig(BaseModel):
    """A weekday and time of day as written in the config file."""
    weekday: int  # 1=Monday, 7=Sunday; range checked by the domain
    hour: int
    minute: int = 0

    @field_validator("hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 23."""
        if not 0 <= v <= 23:
            raise ValueError(f"Hour must be between 0 and 23, got {v}")
        return v

    @field_validator("minute")
    @classmethod
    def validate_minute(cls, v: int) -> int:
        """Validate minute is between 0 and 59."""
        if not 0 <= v <= 59:
            raise ValueError(f"Minute must be between 0 and 59, got {v}")
        return v

    def to_domain(self) -> TimeInWeek:
        return TimeInWeek(weekday=self.weekday, hour=self.hour, minute=self.minute)


class AvailabilityWindowConfig(BaseModel):
    """Recurring weekly availability window."""
    model_config = ConfigDict(populate_by_name=True)

    from_: TimeInWeekConfig = Field(alias="from")
    to: TimeInWeekConfig

    def to_domain(self) -> Availability:
        return Availability(start=self.from_.to_domain(), end=self.to.to_domain())


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "Europe/Helsinki"
    calendar_length_days: int = 7
    duration_minutes: int = 60
    must_book_hours_before: float = 0
    availability: List[AvailabilityWindowConfig] = Field(default_factory=list)
    bookings_file: Optional[Path] = None

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone is known to the timezone database."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: '{value}'") from exc
        return value

    @field_validator("calendar_length_days")
    @classmethod
    def validate_calendar_length(cls, value: int) -> int:
        """Ensure the calendar length is not negative."""
        if value < 0:
            raise ValueError("calendar_length_days must not be negative")
        return value

    def to_availability_windows(self) -> List[Availability]:
        """Convert configured windows to domain objects."""
        return [window.to_domain() for window in self.availability]

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"Please create a config.yaml file. See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        config = cls(**data)

        # Booking files are looked up next to the config file
        if config.bookings_file is not None and not config.bookings_file.is_absolute():
            config.bookings_file = config_path.parent / config.bookings_file

        return config


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
