"""Configuration management for rack-planner.

Loads settings from environment variables or a .env file. Every variable
carries the ``RACK_PLANNER_`` prefix.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rack_planner.exceptions import ConfigurationError

VALID_STRATEGIES = ("nearest-fit", "top-first", "bottom-first", "center-biased", "compact")


class RackPlannerSettings(BaseSettings):
    """Application settings loaded from environment variables and .env files.

    Priority (highest to lowest):
      1. Explicit constructor arguments
      2. Environment variables (RACK_PLANNER_DEFAULT_RACK_SIZE, etc.)
      3. .env file in current directory
    """

    model_config = SettingsConfigDict(
        env_prefix="RACK_PLANNER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_rack_size: Annotated[
        int, Field(description="Rack size used when a file or template omits one")
    ] = 42
    unit_pixel_height: Annotated[
        float, Field(description="Height of one rack unit in pixels for pointer snapping")
    ] = 25.0
    default_strategy: Annotated[
        str, Field(description="Placement strategy for auto-placed devices")
    ] = "nearest-fit"
    strict_import: Annotated[
        bool, Field(description="Abort a CSV import at the first rejected row")
    ] = False
    max_device_size: Annotated[
        int, Field(description="Largest device size accepted by the CSV importer")
    ] = 42
    extra_template_dirs: Annotated[
        str,
        Field(description="Comma-separated additional template directories"),
    ] = ""

    @field_validator("default_rack_size", "max_device_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"must be >= 1, got {v}")
        return v

    @field_validator("unit_pixel_height")
    @classmethod
    def validate_unit_height(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"unit_pixel_height must be > 0, got {v}")
        return v

    @field_validator("default_strategy")
    @classmethod
    def validate_strategy(cls, v: str) -> str:
        v = v.strip().lower()
        if v not in VALID_STRATEGIES:
            raise ValueError(f"Unknown strategy '{v}'. Choose from: {', '.join(VALID_STRATEGIES)}")
        return v

    @property
    def template_dirs(self) -> list[Path]:
        dirs: list[Path] = []
        if self.extra_template_dirs:
            for d in self.extra_template_dirs.split(","):
                d = d.strip()
                if d:
                    dirs.append(Path(d).expanduser())
        return dirs

    def require_template_dirs(self) -> list[Path]:
        """Raise if a configured template directory does not exist; return them."""
        dirs = self.template_dirs
        for d in dirs:
            if not d.is_dir():
                raise ConfigurationError(f"Template directory does not exist: {d}")
        return dirs


_settings: RackPlannerSettings | None = None


def get_settings(**overrides) -> RackPlannerSettings:
    """Get or create the application settings singleton."""
    global _settings
    if _settings is None or overrides:
        _settings = RackPlannerSettings(**overrides)
    return _settings


def reset_settings() -> None:
    """Reset cached settings (useful for testing)."""
    global _settings
    _settings = None
