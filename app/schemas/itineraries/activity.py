from pydantic import Field, field_validator
from datetime import date as dt, datetime
from typing import List
from uuid import UUID
from app.schemas.base import CamelModel, naive_utc


class ActivityCreate(CamelModel):
    title: str = Field(min_length=1)
    occurs_at: datetime

    @field_validator("occurs_at")
    @classmethod
    def normalise_timestamp(cls, value: datetime) -> datetime:
        return naive_utc(value)

class ActivityResponse(CamelModel):
    id: UUID
    title: str
    occurs_at: datetime

class ActivityGroup(CamelModel):
    date: dt
    activities: List[ActivityResponse]

class ActivityListResponse(CamelModel):
    activities: List[ActivityGroup]

class CreateActivityResponse(CamelModel):
    activity_id: UUID
