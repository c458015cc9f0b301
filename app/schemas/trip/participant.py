from pydantic import EmailStr
from typing import List, Optional
from uuid import UUID
from app.schemas.base import CamelModel

# When someone is invited to an existing trip
class ParticipantInvite(CamelModel):
    email: EmailStr

class InviteParticipantResponse(CamelModel):
    participant_id: UUID

class ParticipantResponse(CamelModel):
    id: UUID
    trip_id: UUID
    email: str
    is_confirmed: bool

# Entry of the trip participant list, name is derived from the email
class ParticipantOut(CamelModel):
    id: UUID
    email: str
    is_confirmed: bool
    name: Optional[str] = None

class ParticipantListResponse(CamelModel):
    participants: List[ParticipantOut]
