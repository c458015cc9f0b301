from pydantic import EmailStr, Field, field_validator, model_validator
from typing import List
from datetime import datetime
from uuid import UUID
from app.schemas.base import CamelModel, naive_utc

class TripDates(CamelModel):
    destination: str = Field(min_length=1)
    starts_at: datetime
    ends_at: datetime

    @field_validator("destination")
    @classmethod
    def strip_destination(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("destination must not be blank")
        return value

    @field_validator("starts_at", "ends_at")
    @classmethod
    def normalise_timestamp(cls, value: datetime) -> datetime:
        return naive_utc(value)

    @model_validator(mode="after")
    def check_date_range(self):
        if self.starts_at > self.ends_at:
            raise ValueError("starts_at must not be after ends_at")
        return self

class TripCreate(TripDates):
    owner_name: str = Field(min_length=1)
    owner_email: EmailStr
    emails_to_invite: List[EmailStr] = []

class TripUpdate(TripDates):
    pass

class TripResponse(CamelModel):
    id: UUID
    destination: str
    starts_at: datetime
    ends_at: datetime
    is_confirmed: bool

class TripDetailsResponse(CamelModel):
    trip: TripResponse

class CreateTripResponse(CamelModel):
    trip_id: UUID
