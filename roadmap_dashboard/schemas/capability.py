from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from roadmap_dashboard.schemas.common import RECORD_CONFIG, UtcDateTime

# Sentinel milestone value meaning "no milestone selected"
NO_MILESTONE = "none"


class CapabilityStatus(str, Enum):
    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    ON_HOLD = "On Hold"


class RagStatus(str, Enum):
    """Red/Amber/Green health indicator."""
    RED = "Red"
    AMBER = "Amber"
    GREEN = "Green"


class CapabilityBase(BaseModel):
    model_config = RECORD_CONFIG

    name: str = Field(..., min_length=1)
    workstream_lead: str = ""
    sme: str = ""
    ba: str = ""
    milestone: str = NO_MILESTONE  # milestone *name*, not id
    status: CapabilityStatus = CapabilityStatus.NOT_STARTED
    rag_status: RagStatus = RagStatus.GREEN
    notes: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Capability name is required")
        return v

    def milestone_name(self) -> Optional[str]:
        """Referenced milestone name, or None when unset."""
        if not self.milestone or self.milestone == NO_MILESTONE:
            return None
        return self.milestone


class CapabilityCreate(CapabilityBase):
    pass


class CapabilityUpdate(BaseModel):
    model_config = RECORD_CONFIG

    name: Optional[str] = None
    workstream_lead: Optional[str] = None
    sme: Optional[str] = None
    ba: Optional[str] = None
    milestone: Optional[str] = None
    status: Optional[CapabilityStatus] = None
    rag_status: Optional[RagStatus] = None
    notes: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Capability name is required")
        return v


class Capability(CapabilityBase):
    id: str
    created_at: UtcDateTime
    updated_at: UtcDateTime
