"""Pydantic models for config validation.

Opt-in schema validation for ``Config.config_data``.  Call
``Config.validated()`` to obtain a typed, validated ``PathwiseConfig``
instance.  Dict-based access through ``Config.get`` keeps working, but
values coming from environment variables arrive as strings there; the
validated model coerces them.

All rates are whole-number percent (6.5 means 6.5%), matching the records
the calculators consume.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class HouseSettings(BaseModel):
    """Assumptions for the house-affordability solver."""

    gift_down_payment: float = Field(default=100_000, ge=0)
    loan_term_years: int = 30
    mortgage_rate: float = Field(default=6.5, ge=0)
    property_tax_rate: float = Field(default=1.2, ge=0)
    annual_insurance: float = Field(default=2_400, ge=0)

    @field_validator("loan_term_years")
    @classmethod
    def _known_term(cls, v: int) -> int:
        if v not in (15, 30):
            raise ValueError("loan_term_years must be 15 or 30")
        return v


class RoadmapSettings(BaseModel):
    """Assumptions for the multi-phase roadmap projection."""

    emergency_fund_months: float = Field(default=6, ge=0)
    investment_return: float = Field(default=7.0, ge=0)


class WithdrawalSettings(BaseModel):
    """Assumptions for the retirement-withdrawal tradeoff."""

    expected_return: float = Field(default=7.0, ge=0)
    early_withdrawal_penalty: float = Field(default=10.0, ge=0, le=100)


class LoggingSettings(BaseModel):
    """Log sink configuration."""

    level: str = "WARNING"
    file: Path | None = None

    @field_validator("level", mode="before")
    @classmethod
    def _upper(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("file", mode="before")
    @classmethod
    def _expand_user(cls, v: Any) -> Any:
        if v in ("", None):
            return None
        if isinstance(v, str):
            return Path(v).expanduser()
        if isinstance(v, Path):
            return v.expanduser()
        return v


class PathwiseConfig(BaseModel):
    """Root configuration model.

    Uses ``extra="allow"`` so consumers can bolt on custom sections
    without touching this schema.
    """

    model_config = ConfigDict(extra="allow")

    house: HouseSettings = HouseSettings()
    roadmap: RoadmapSettings = RoadmapSettings()
    withdrawal: WithdrawalSettings = WithdrawalSettings()
    logging: LoggingSettings = LoggingSettings()
