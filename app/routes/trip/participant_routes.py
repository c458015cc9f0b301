from fastapi import APIRouter, Depends, Response, status
from app.schemas.trip.participant import (
    ParticipantInvite, InviteParticipantResponse, ParticipantListResponse, ParticipantResponse
)
from app.core.validation import validator
from app.dependencies.store import get_store
from app.services.notifications.dispatcher import get_dispatcher
from app.services.trips.participant_service import ParticipantService

router = APIRouter(tags=["Participants"])

async def get_participant_service(
    store=Depends(get_store),
    dispatcher=Depends(get_dispatcher)
) -> ParticipantService:
    return ParticipantService(store, validator, dispatcher)

@router.post("/trips/{trip_id}/invites", response_model=InviteParticipantResponse, status_code=status.HTTP_201_CREATED)
async def invite_participant_route(
    trip_id: str,
    invite_data: ParticipantInvite,
    participant_service: ParticipantService = Depends(get_participant_service)
):
    participant_id = await participant_service.invite_participant(trip_id, invite_data)
    return InviteParticipantResponse(participant_id=participant_id)

@router.get("/trips/{trip_id}/participants", response_model=ParticipantListResponse)
async def list_participants_route(
    trip_id: str,
    participant_service: ParticipantService = Depends(get_participant_service)
):
    return await participant_service.list_participants(trip_id)

@router.get("/participants/{participant_id}", response_model=ParticipantResponse)
async def get_participant_route(
    participant_id: str,
    participant_service: ParticipantService = Depends(get_participant_service)
):
    return await participant_service.get_participant(participant_id)

@router.patch("/participants/{participant_id}/confirm", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def confirm_participant_route(
    participant_id: str,
    participant_service: ParticipantService = Depends(get_participant_service)
):
    await participant_service.confirm_participant(participant_id)
