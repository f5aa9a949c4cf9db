"""
Projection configuration.

Engine parameters are frozen dataclasses so one run is fully described by its
inputs. Deployment-level defaults (blending factor, history window, logging)
can be overridden from the environment through EngineSettings.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EngineSettings(BaseSettings):
    """Environment-driven defaults (PROJECTION_* variables)."""

    model_config = SettingsConfigDict(
        env_prefix="PROJECTION_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    non_recurring_factor: Decimal = Field(
        default=Decimal("0.7"),
        ge=0,
        description="Share of the historical average treated as non-recurring cash flow",
    )
    history_months: int = Field(
        default=6,
        gt=0,
        description="Trailing months of transactions used for historical averages",
    )
    max_occurrences: int = Field(
        default=31,
        gt=0,
        description="Upper bound on occurrences produced per expansion call",
    )
    default_month_count: int = Field(default=6, gt=0)

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_json: bool = False


@lru_cache()
def get_settings() -> EngineSettings:
    """Cached settings instance."""
    return EngineSettings()


@dataclass(frozen=True)
class ForecastConfig:
    month_count: int = 6
    non_recurring_factor: Decimal = Decimal("0.7")
    history_months: int = 6

    # iteration bound inside each month window
    max_occurrences: int = 31

    @classmethod
    def from_settings(cls, settings: EngineSettings | None = None) -> "ForecastConfig":
        s = settings or get_settings()
        return cls(
            month_count=s.default_month_count,
            non_recurring_factor=s.non_recurring_factor,
            history_months=s.history_months,
            max_occurrences=s.max_occurrences,
        )


@dataclass(frozen=True)
class NetWorthParams:
    """
    Assumptions for the net-worth simulator.

    Defaults are the household plan the dashboard ships with: Rp 112 juta
    invested per year, Rp 500 juta/year of extra mortgage principal ("bombing")
    at a 4% penalty for six years, 10% annual investment return.
    """

    annual_contribution: Decimal = Decimal("112000000")
    annual_debt_paydown: Decimal = Decimal("500000000")
    paydown_penalty_rate: Decimal = Decimal("0.04")
    investment_return_rate: Decimal = Decimal("0.10")
    active_paydown_years: int = 6
    horizon_years: int = 17
