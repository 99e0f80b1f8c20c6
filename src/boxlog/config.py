"""Logger configuration using Pydantic Settings."""

import os

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from boxlog.core.exceptions import InvalidLevelError
from boxlog.core.handler import HandlerOptions
from boxlog.models.event import Level
from boxlog.render.metrics import PanelPolicy


class Settings(BaseSettings):
    """Logger settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="BOXLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Output selection
    level: str = "info"
    add_source: bool = True
    as_json: bool = True
    pretty: bool = False
    set_default: bool = True
    color: bool = True

    # Terminal width
    width: int | None = Field(default=None, ge=20, le=500)  # None = probe the terminal
    default_width: int = Field(default=80, ge=20, le=500)

    # Metrics panel tiers
    metrics_min_width: int = Field(default=159, ge=20)
    metrics_compact_max_width: int = Field(default=180, ge=20)
    metrics_paired_max_width: int = Field(default=200, ge=20)
    metrics_compact_panel_width: int = Field(default=50, ge=10)
    metrics_paired_panel_width: int = Field(default=75, ge=10)
    metrics_full_panel_width: int = Field(default=100, ge=10)

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: object) -> str:
        """Unknown level names fall back to info."""
        try:
            return Level.parse(value).name.lower()  # type: ignore[arg-type]
        except InvalidLevelError:
            return Level.INFO.name.lower()

    @model_validator(mode="after")
    def check_tiers(self) -> "Settings":
        if not (
            self.metrics_min_width
            <= self.metrics_compact_max_width
            <= self.metrics_paired_max_width
        ):
            raise ValueError(
                "metrics tier widths must satisfy min <= compact max <= paired max"
            )
        return self

    @property
    def min_level(self) -> Level:
        """Minimum level to output."""
        return Level.parse(self.level)

    @property
    def color_enabled(self) -> bool:
        """Color unless disabled here or by the NO_COLOR convention."""
        return self.color and not os.environ.get("NO_COLOR")

    def panel_policy(self) -> PanelPolicy:
        return PanelPolicy(
            min_width=self.metrics_min_width,
            compact_max_width=self.metrics_compact_max_width,
            paired_max_width=self.metrics_paired_max_width,
            compact_panel_width=self.metrics_compact_panel_width,
            paired_panel_width=self.metrics_paired_panel_width,
            full_panel_width=self.metrics_full_panel_width,
        )

    def handler_options(self) -> HandlerOptions:
        """Runtime options for handlers built from these settings."""
        return HandlerOptions(
            level=self.min_level,
            add_source=self.add_source,
            color=self.color_enabled,
            width=self.width,
            default_width=self.default_width,
            panel_policy=self.panel_policy(),
        )


# Global settings instance
settings = Settings()
