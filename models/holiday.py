"""
Holiday reference data models for the PREP/GO Planner.

A HolidayFact is an immutable datum. Several facts may share a date when
regions observe different holidays on the same day.
"""

from typing import FrozenSet, Optional
from datetime import date as date_type
from pydantic import BaseModel, Field, ConfigDict, field_validator

ALL_JURISDICTIONS = "ALL"


class HolidayFact(BaseModel):
    """A public holiday observed in one or more jurisdictions."""

    date: date_type = Field(description="Calendar date of the holiday")
    name: str = Field(min_length=1, description="Holiday name")
    jurisdictions: FrozenSet[str] = Field(
        default=frozenset({ALL_JURISDICTIONS}),
        description="Jurisdiction codes observing the holiday ('ALL' = nationwide)"
    )

    @field_validator('jurisdictions')
    @classmethod
    def validate_jurisdictions(cls, v):
        """Codes are compared upper-case; an empty set is meaningless."""
        if not v:
            raise ValueError("A holiday must apply to at least one jurisdiction")
        return frozenset(code.strip().upper() for code in v)

    def applies_to(self, jurisdiction: str) -> bool:
        """True if this fact is observed in the queried jurisdiction."""
        query = jurisdiction.strip().upper()
        if query == ALL_JURISDICTIONS or ALL_JURISDICTIONS in self.jurisdictions:
            return True
        return query in self.jurisdictions

    model_config = ConfigDict(frozen=True)


class HolidayInfo(BaseModel):
    """Display-oriented answer to 'is this day a holiday, and which one?'"""

    is_holiday: bool = False
    name: Optional[str] = None
    jurisdictions: Optional[list[str]] = None

    @property
    def label(self) -> str:
        """e.g. 'Labour Day (QLD)'."""
        if not self.is_holiday:
            return ""
        return f"{self.name} ({', '.join(self.jurisdictions or [])})"
