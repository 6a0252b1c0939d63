"""Export configuration loaded from environment variables.

Holds the user preferences the browser popup used to persist, plus logging
and rendering settings. ExportSettings.to_options() resolves them into the
immutable ExportOptions passed to every extraction/serialization call.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from src.timetable_export.models import ExportFormat, ExportOptions, OutputType


class ExportSettings(BaseSettings):
    """Export configuration loaded from environment variables.

    Settings are loaded from TIMETABLE_EXPORT_* environment variables with sensible
    defaults. For local development, create a .env file in the project root.
    """

    # Export preferences (popup options)
    format: ExportFormat = Field(
        default="pretty",
        description="JSON layout: 'pretty' (2-space indent) or 'compact'",
    )
    default_color: str = Field(
        default="#ff6b6b",
        description="Color for entries without an explicit or inline color",
    )
    include_empty_cells: bool = Field(
        default=False,
        description="Emit a placeholder entry for grid cells with no class",
    )
    include_meta: bool = Field(
        default=True,
        description="Include teacher, classroom and memo fields",
    )
    output_type: OutputType = Field(
        default="download",
        description="'download' writes a file, 'clipboard' writes to stdout",
    )

    # Paths
    output_dir: str = Field(
        default=".",
        description="Directory that downloaded exports are written to",
    )

    # Rendering
    render_timeout_ms: int = Field(
        default=30000,
        description="Timeout for rendering a saved page in headless Chromium",
    )

    # Logging
    log_json: bool = Field(
        default=False,
        description="Output logs in JSON format (for production)",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    model_config = {
        "env_prefix": "TIMETABLE_EXPORT_",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("default_color")
    @classmethod
    def strip_color(cls, value: str) -> str:
        return value.strip()

    def to_options(self, **overrides) -> ExportOptions:
        """Resolve settings (plus CLI overrides that are not None) into ExportOptions."""
        values = {
            "format": self.format,
            "default_color": self.default_color,
            "include_empty_cells": self.include_empty_cells,
            "include_meta": self.include_meta,
            "output_type": self.output_type,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ExportOptions(**values)


# Singleton pattern
_config: ExportSettings | None = None


def get_config() -> ExportSettings:
    """Get the export configuration singleton.

    Returns:
        ExportSettings: Export configuration instance
    """
    global _config
    if _config is None:
        _config = ExportSettings()
    return _config


def reset_config() -> None:
    """Drop the cached singleton so the next get_config() re-reads the environment."""
    global _config
    _config = None
