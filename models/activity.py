"""
Activity and Policy data models for the PREP/GO Planner.
"""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict, AliasChoices, field_validator


class Activity(BaseModel):
    """
    A single schedulable activity with a PREP milestone and a GO milestone.
    Dates are kept in their textual day-first form (DD/MM/YYYY) so that a row
    being edited can hold an incomplete value without failing validation.
    """

    # --- Core Identity ---
    activity_id: str = Field(
        default="",
        validation_alias=AliasChoices("activity_id", "activityId"),
        description="Structured identifier: non-numeric prefix + sequence number (e.g. 'A12')"
    )
    activity_name: str = Field(
        default="",
        validation_alias=AliasChoices("activity_name", "activityName"),
        description="Human-readable name"
    )

    # --- Free Text ---
    description: str = Field(default="", description="Notes about the activity")
    strategy: str = Field(default="", description="How the activity will be delivered")

    # --- Milestones ---
    prep_date: str = Field(
        default="",
        validation_alias=AliasChoices("prep_date", "prepDate"),
        description="Preparation date, DD/MM/YYYY"
    )
    go_date: str = Field(
        default="",
        validation_alias=AliasChoices("go_date", "goDate"),
        description="Execution date, DD/MM/YYYY"
    )

    # --- Cached Flags (not authoritative, recomputed on write) ---
    is_weekend: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_weekend", "isWeekend"),
        description="True if either milestone fell on a weekend when written"
    )
    is_holiday: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_holiday", "isHoliday"),
        description="True if either milestone fell on a public holiday when written"
    )

    @field_validator("activity_id")
    @classmethod
    def strip_activity_id(cls, v: str) -> str:
        return v.strip()

    model_config = ConfigDict(populate_by_name=True, json_schema_extra={
        "example": {
            "activity_id": "A3",
            "activity_name": "Quarterly review",
            "description": "Review KPIs with the team",
            "strategy": "Workshop",
            "prep_date": "07/03/2025",
            "go_date": "10/03/2025",
            "is_weekend": False,
            "is_holiday": False
        }
    })


class SchedulingPolicy(BaseModel):
    """Per-interaction toggles controlling which days are acceptable."""

    allow_weekends: bool = Field(default=False, description="Accept Saturday/Sunday dates")
    allow_holidays: bool = Field(default=False, description="Accept public holiday dates")
    jurisdiction: str = Field(
        default="ALL",
        description="Holiday jurisdiction to check against ('ALL' = a holiday anywhere)"
    )

    @classmethod
    def strict(cls, jurisdiction: str = "ALL") -> "SchedulingPolicy":
        """Neither weekends nor holidays are acceptable."""
        return cls(allow_weekends=False, allow_holidays=False, jurisdiction=jurisdiction)

    @classmethod
    def permissive(cls) -> "SchedulingPolicy":
        """Every calendar day is acceptable."""
        return cls(allow_weekends=True, allow_holidays=True)


class PrepDerivation(BaseModel):
    """
    Outcome of deriving a PREP date from a GO date.
    When 'adjusted' is True the caller should tell the user that the
    PREP date moved from 'naive_prep' to 'prep_date'.
    """

    go_date: str
    naive_prep: str
    prep_date: str
    adjusted: bool = False
    capped: bool = Field(
        default=False,
        description="True if the backward search hit its step limit without finding an acceptable day"
    )

    @property
    def message(self) -> Optional[str]:
        if not self.adjusted:
            return None
        return (
            f"Prep date automatically adjusted from {self.naive_prep} "
            f"to {self.prep_date} to avoid weekend/holiday"
        )
