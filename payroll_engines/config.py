"""
ShiftPay Engine Configuration

Environment-based settings for the Korean payroll and schedule-cost engine.
Statutory figures default to the 2025 values.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "ShiftPay Payroll Engine"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: str = "INFO"

    # Labor law (2025)
    tax_year: int = 2025
    minimum_wage: Decimal = Field(
        default=Decimal("10030"),
        description="Statutory minimum hourly wage (KRW)",
    )
    holiday_pay_threshold_hours: Decimal = Field(
        default=Decimal("15"),
        description="Weekly hours at which weekly holiday pay becomes owed",
    )
    optimal_weekly_hours: Decimal = Field(
        default=Decimal("14"),
        description="Weekly ceiling proposed by the holiday-pay optimizer",
    )
    max_regular_daily_hours: Decimal = Decimal("8")
    full_time_weekly_hours: Decimal = Decimal("40")
    holiday_hours_full_time: Decimal = Decimal("8")
    monthly_average_weeks: Decimal = Field(
        default=Decimal("4.33"),
        description="Average weeks per month used for monthly conversion",
    )

    # Night work window
    night_start_hour: int = Field(default=22, ge=0, le=23)
    night_end_hour: int = Field(default=6, ge=0, le=23)
    night_hours_mode: Literal["approximate", "exact"] = "approximate"

    # Premium multipliers
    overtime_multiplier: Decimal = Decimal("1.5")
    night_multiplier: Decimal = Decimal("1.5")

    # Social insurance, employee share
    employee_national_pension_rate: Decimal = Decimal("0.045")
    employee_health_insurance_rate: Decimal = Decimal("0.03545")
    employee_employment_insurance_rate: Decimal = Decimal("0.009")
    long_term_care_rate: Decimal = Field(
        default=Decimal("0.1295"),
        description="Long-term care insurance as a share of the health premium",
    )

    # Social insurance, employer share
    employer_national_pension_rate: Decimal = Decimal("0.045")
    employer_health_insurance_rate: Decimal = Decimal("0.03545")
    employer_employment_insurance_rate: Decimal = Decimal("0.0155")
    employment_stability_rate: Decimal = Field(
        default=Decimal("0.0025"),
        description="Employment stability program, employer only (under 150 staff)",
    )
    workers_compensation_rate: Decimal = Field(
        default=Decimal("0.007"),
        description="Industrial accident insurance, employer only (industry average)",
    )

    # Simplified withholding
    income_tax_rate: Decimal = Field(
        default=Decimal("0.033"),
        description="Flat income tax approximation, not the official table",
    )
    local_tax_rate: Decimal = Field(
        default=Decimal("0.10"),
        description="Local income tax as a share of income tax",
    )

    # Templates
    default_slot_minutes: int = Field(default=30, gt=0, le=240)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
