"""
Engine constants for the PREP/GO Planner.

All tunables live here so the resolver and the planner never carry magic numbers.
"""

from pydantic import BaseModel, Field


class EngineConfig(BaseModel):
    """Tunable constants shared by the resolver and the planner."""

    prep_offset_days: int = Field(
        default=3, ge=1,
        description="PREP = GO minus this many calendar days"
    )
    max_backward_steps: int = Field(
        default=10, ge=0,
        description="Upper bound on days walked back when resolving a PREP date"
    )
    default_shift_days: int = Field(
        default=5,
        description="Days added by a bulk 'move forward' when no offset is given"
    )
    default_id_prefix: str = Field(
        default="A", min_length=1,
        description="Prefix used when an activity arrives without an id"
    )


DEFAULT_CONFIG = EngineConfig()
