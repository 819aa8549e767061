"""
Labor & Payroll Service Configuration

Environment-based settings for the payroll and labor cost API.
"""

from datetime import timedelta
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from engines.schemas.overtime import OvertimeRules
from engines.services.overtime_rules import WorkweekStart


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Labor Ledger"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_v1_prefix: str = "/api/v1"
    allowed_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000"])

    # Punch parsing
    duplicate_punch_window_minutes: float = Field(
        default=5,
        ge=0,
        description="Same-type clock punches closer than this are one event",
    )
    max_shift_hours: float = Field(
        default=16,
        gt=0,
        description="Clock-in/out spans longer than this are flagged as missed punches",
    )

    # Overtime (federal FLSA baseline)
    workweek_start: WorkweekStart = "sunday"
    weekly_overtime_threshold_hours: float = 40  # hours per workweek
    weekly_overtime_multiplier: float = 1.5
    daily_overtime_threshold_hours: float | None = None
    daily_overtime_multiplier: float = 1.5
    daily_double_time_threshold_hours: float | None = None
    daily_double_time_multiplier: float = 2.0

    # Check printing
    check_business_name: str = Field(default="", description="Default business name on checks")
    check_bank_name: str = Field(default="", description="Default bank name on checks")

    @property
    def duplicate_punch_window(self) -> timedelta:
        return timedelta(minutes=self.duplicate_punch_window_minutes)

    def overtime_rules(self) -> OvertimeRules:
        """Default overtime rules for requests that do not supply their own."""
        return OvertimeRules(
            weekly_threshold_hours=self.weekly_overtime_threshold_hours,
            weekly_ot_multiplier=self.weekly_overtime_multiplier,
            daily_threshold_hours=self.daily_overtime_threshold_hours,
            daily_ot_multiplier=self.daily_overtime_multiplier,
            daily_double_threshold_hours=self.daily_double_time_threshold_hours,
            daily_double_multiplier=self.daily_double_time_multiplier,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
