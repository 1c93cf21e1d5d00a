"""Pydantic schemas for clockpay configuration.

All schemas use extra='forbid' so a typo in profile.yaml is an error
rather than a silently ignored key.
"""

from datetime import date
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_INPUT_PATTERN = "Report*.csv"


class EmployeeProfile(BaseModel):
    """Pay terms for one employee."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(..., min_length=1, description="Identifier as it appears in the clock export")
    hourly_rate: float = Field(..., ge=0, description="Currency per hour")
    mandatory_deduction: float = Field(
        default=0, ge=0,
        description="Fixed per-period withholding (e.g. social security contribution)",
    )
    vacation_days: int = Field(default=0, ge=0, description="Vacation days credited this period")


class RosterEntry(BaseModel):
    """Roster entry as written in profile.yaml (name is the mapping key)."""

    model_config = ConfigDict(extra="forbid")

    hourly_rate: float = Field(..., ge=0)
    mandatory_deduction: float = Field(default=0, ge=0)
    vacation_days: int = Field(default=0, ge=0)


class PayrollProfile(BaseModel):
    """Contents of profile.yaml."""

    model_config = ConfigDict(extra="forbid")

    input_pattern: str = Field(
        default=DEFAULT_INPUT_PATTERN,
        description="Glob for attendance exports; each match is one period",
    )
    holidays: List[date] = Field(default_factory=list, description="Holiday dates (YYYY-MM-DD)")
    roster: Dict[str, RosterEntry] = Field(default_factory=dict)

    @field_validator("roster")
    @classmethod
    def check_names(cls, roster: Dict[str, RosterEntry]) -> Dict[str, RosterEntry]:
        stripped = [name.strip() for name in roster]
        if any(not name for name in stripped):
            raise ValueError("roster names must not be blank")
        if len(set(stripped)) != len(stripped):
            raise ValueError("roster names must be unique after trimming whitespace")
        return roster

    def employees(self) -> List[EmployeeProfile]:
        return [
            EmployeeProfile(name=name.strip(), **entry.model_dump())
            for name, entry in self.roster.items()
        ]
