from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field, field_validator

from roadmap_dashboard.schemas.common import RECORD_CONFIG, UtcDateTime


class MilestoneBase(BaseModel):
    model_config = RECORD_CONFIG

    name: str = Field(..., min_length=1)
    date: UtcDateTime

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Milestone name is required")
        return v


class MilestoneCreate(MilestoneBase):
    pass


class MilestoneUpdate(BaseModel):
    model_config = RECORD_CONFIG

    name: Optional[str] = None
    date: Optional[UtcDateTime] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError("Milestone name is required")
        return v


class Milestone(MilestoneBase):
    id: str
    created_at: UtcDateTime
    updated_at: UtcDateTime
