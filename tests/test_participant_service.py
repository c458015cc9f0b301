"""Tests for participant invitation, listing and confirmation."""

import uuid
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio

from app.core.errors import (
    AlreadyConfirmedError,
    InvalidIdentifierError,
    InvalidInputError,
    NotFoundError,
    PersistenceError,
)
from app.services.trips.participant_service import ParticipantService, derive_display_name
from app.services.trips.trip_service import TripService


@pytest.fixture
def participant_service(store, validator, dispatcher):
    return ParticipantService(store, validator, dispatcher)


@pytest_asyncio.fixture
async def trip_id(store, validator, dispatcher, trip_payload):
    return await TripService(store, validator, dispatcher).create_trip(trip_payload(emails_to_invite=[]))


# ==================== Display name ====================

@pytest.mark.parametrize(
    "email, expected",
    [
        ("jane.doe@example.com", "jane.doe"),
        ("Jane Doe <jane@example.com>", "jane"),
        ("not-an-email", None),
        ("two@@example.com", None),
        ("jane@example.test", "jane"),
        ("jane@mailhost", "jane"),
        ('"jane doe"@example.com', "jane doe"),
        ("jane@[192.0.2.1]", "jane"),
        ("", None),
    ],
)
def test_derive_display_name(email, expected):
    assert derive_display_name(email) == expected


# ==================== Invitation ====================

@pytest.mark.asyncio
async def test_invite_participant(participant_service, trip_id, dispatcher):
    participant_id = await participant_service.invite_participant(trip_id, {"email": "carla@example.com"})

    participant = await participant_service.get_participant(participant_id)
    assert participant.trip_id == trip_id
    assert participant.email == "carla@example.com"
    assert participant.is_confirmed is False
    dispatcher.notify_participant_invited.assert_called_once_with(participant_id)


@pytest.mark.asyncio
async def test_invite_participant_to_missing_trip_is_persistence_failure(participant_service, dispatcher):
    with pytest.raises(PersistenceError):
        await participant_service.invite_participant(uuid.uuid4(), {"email": "carla@example.com"})

    dispatcher.notify_participant_invited.assert_not_called()


@pytest.mark.asyncio
async def test_invite_same_email_twice_fails(participant_service, trip_id):
    await participant_service.invite_participant(trip_id, {"email": "carla@example.com"})

    with pytest.raises(PersistenceError):
        await participant_service.invite_participant(trip_id, {"email": "carla@example.com"})


@pytest.mark.asyncio
async def test_invite_participant_validates_email(participant_service, trip_id):
    with pytest.raises(InvalidInputError):
        await participant_service.invite_participant(trip_id, {"email": "carla"})


@pytest.mark.asyncio
async def test_invite_participant_invalid_trip_identifier(participant_service):
    with pytest.raises(InvalidIdentifierError):
        await participant_service.invite_participant("1234", {"email": "carla@example.com"})


# ==================== Lookup ====================

@pytest.mark.asyncio
async def test_get_participant_not_found(participant_service):
    with pytest.raises(NotFoundError):
        await participant_service.get_participant(uuid.uuid4())


@pytest.mark.asyncio
async def test_list_participants_with_display_names(participant_service, trip_id):
    await participant_service.invite_participant(trip_id, {"email": "jane.doe@example.com"})
    await participant_service.invite_participant(trip_id, {"email": "ana@example.com"})

    listing = await participant_service.list_participants(trip_id)

    names = {p.email: p.name for p in listing.participants}
    assert names == {"jane.doe@example.com": "jane.doe", "ana@example.com": "ana"}


@pytest.mark.asyncio
async def test_list_participants_omits_name_for_unparseable_email(participant_service, store, trip_id):
    # rows written straight through the store skip payload validation
    await store.insert_participant(trip_id, "legacy-entry")

    listing = await participant_service.list_participants(trip_id)

    assert len(listing.participants) == 1
    assert listing.participants[0].name is None


@pytest.mark.asyncio
async def test_list_participants_empty_trip(participant_service, trip_id):
    listing = await participant_service.list_participants(trip_id)

    assert listing.participants == []


@pytest.mark.asyncio
async def test_list_participants_missing_trip(participant_service):
    with pytest.raises(NotFoundError):
        await participant_service.list_participants(uuid.uuid4())


# ==================== Confirmation ====================

@pytest.mark.asyncio
async def test_confirm_participant_once(participant_service, trip_id, dispatcher):
    participant_id = await participant_service.invite_participant(trip_id, {"email": "carla@example.com"})

    await participant_service.confirm_participant(participant_id)
    assert (await participant_service.get_participant(participant_id)).is_confirmed is True

    with pytest.raises(AlreadyConfirmedError):
        await participant_service.confirm_participant(participant_id)

    assert (await participant_service.get_participant(participant_id)).is_confirmed is True
    dispatcher.notify_participants_trip_confirmed.assert_not_called()


@pytest.mark.asyncio
async def test_confirm_participant_is_scoped_to_one_participant(participant_service, trip_id):
    first = await participant_service.invite_participant(trip_id, {"email": "ana@example.com"})
    second = await participant_service.invite_participant(trip_id, {"email": "bruno@example.com"})

    await participant_service.confirm_participant(first)

    assert (await participant_service.get_participant(second)).is_confirmed is False
    await participant_service.confirm_participant(second)


@pytest.mark.asyncio
async def test_confirm_participant_not_found(participant_service):
    with pytest.raises(NotFoundError):
        await participant_service.confirm_participant(uuid.uuid4())


@pytest.mark.asyncio
async def test_confirm_participant_loses_race(participant_service, store, trip_id):
    participant_id = await participant_service.invite_participant(trip_id, {"email": "carla@example.com"})
    store.set_participant_confirmed = AsyncMock(return_value=False)

    with pytest.raises(AlreadyConfirmedError):
        await participant_service.confirm_participant(participant_id)
