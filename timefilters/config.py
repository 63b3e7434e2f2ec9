"""
Configuration management using Pydantic models loaded from YAML.
"""

import logging
from pathlib import Path
from typing import Dict, List

import pendulum
import yaml
from pydantic import BaseModel, Field, field_validator

from .domain.exceptions import UnknownScheduleError
from .domain.models import WeekdayTimeRangeSet
from .domain.parser import parse_range

logger = logging.getLogger(__name__)


class AppConfig(BaseModel):
    """Application configuration."""
    timezone: str = "UTC"  # Only used to determine "now"
    log_level: str = "WARNING"
    schedules: Dict[str, List[str]] = Field(default_factory=dict)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone name is known."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("schedules")
    @classmethod
    def validate_schedules(cls, value: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Ensure schedule names are unique and every expression parses."""
        seen_names: set[str] = set()
        problems: List[str] = []
        for name, expressions in value.items():
            name_key = name.lower()
            if name_key in seen_names:
                raise ValueError(f"Duplicate schedule name detected: {name}")
            seen_names.add(name_key)

            invalid = [expr for expr in expressions if parse_range(expr) is None]
            if invalid:
                problems.append(f"{name}: {', '.join(repr(expr) for expr in invalid)}")

        if problems:
            raise ValueError("Invalid range expression(s) in schedules - " + "; ".join(problems))
        return value

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
        logger.info("Loaded %d schedule(s) from %s", len(config.schedules), config_path)
        return config

    def find_schedule_name(self, name: str) -> str | None:
        """Find the configured spelling of a schedule name (case-insensitive)."""
        for schedule_name in self.schedules:
            if schedule_name.lower() == name.lower():
                return schedule_name
        return None

    def get_schedule(self, name: str) -> WeekdayTimeRangeSet:
        """
        Get a configured schedule as a parsed range set.

        Raises:
            UnknownScheduleError: If no schedule has that name
        """
        schedule_name = self.find_schedule_name(name)
        if schedule_name is None:
            raise UnknownScheduleError(name)
        return WeekdayTimeRangeSet.parse(self.schedules[schedule_name])

    def schedule_sets(self) -> Dict[str, WeekdayTimeRangeSet]:
        """All configured schedules, parsed."""
        return {
            name: WeekdayTimeRangeSet.parse(expressions)
            for name, expressions in self.schedules.items()
        }


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of timefilters/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path
