# collab/tests/unit/test_room_directory.py
from unittest.mock import AsyncMock, Mock

import pytest

from collab.domain import schemas
from collab.domain.errors import AuthRequiredError, FetchError, ValidationError
from collab.gateways.interfaces import IRoomGateway
from collab.interactors.room_directory import RoomDirectory


@pytest.fixture
def mock_room_gateway():
    gateway = Mock(spec=IRoomGateway)
    gateway.get_all = AsyncMock(return_value=[])
    gateway.create_room = AsyncMock()
    return gateway


@pytest.fixture
def room_directory(mock_room_gateway):
    return RoomDirectory(mock_room_gateway)


@pytest.mark.asyncio
async def test_list_rooms_keeps_backend_order(room_directory, mock_room_gateway, make_room):
    rooms = [make_room(1, "General"), make_room(2, "Design")]
    mock_room_gateway.get_all.return_value = rooms

    result = await room_directory.list_rooms()

    assert result == tuple(rooms)
    assert room_directory.rooms == tuple(rooms)


@pytest.mark.asyncio
async def test_list_rooms_failure_keeps_cache(room_directory, mock_room_gateway, make_room):
    mock_room_gateway.get_all.return_value = [make_room(1)]
    await room_directory.list_rooms()
    mock_room_gateway.get_all.side_effect = FetchError("timeout")

    with pytest.raises(FetchError):
        await room_directory.list_rooms()

    assert [room.id for room in room_directory.rooms] == [1]


@pytest.mark.asyncio
async def test_create_room_requires_identity(room_directory, mock_room_gateway):
    with pytest.raises(AuthRequiredError):
        await room_directory.create_room(None, "General")
    mock_room_gateway.create_room.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("name", ["", "   ", None])
async def test_create_room_requires_name(room_directory, mock_room_gateway, identity, name):
    with pytest.raises(ValidationError):
        await room_directory.create_room(identity, name)
    mock_room_gateway.create_room.assert_not_called()


@pytest.mark.asyncio
async def test_create_room_relists(room_directory, mock_room_gateway, identity, make_room):
    room = make_room(1, "General")
    mock_room_gateway.create_room.return_value = room
    mock_room_gateway.get_all.return_value = [room]

    created = await room_directory.create_room(identity, "  General ", "")

    assert created == room
    mock_room_gateway.create_room.assert_called_once_with(
        schemas.RoomCreate(name="General", description=None), "user-1"
    )
    assert room_directory.rooms == (room,)


@pytest.mark.asyncio
async def test_create_room_survives_failed_relist(
    room_directory, mock_room_gateway, identity, make_room
):
    room = make_room(1, "General")
    mock_room_gateway.create_room.return_value = room
    mock_room_gateway.get_all.side_effect = FetchError("timeout")

    created = await room_directory.create_room(identity, "General")

    assert created == room
    assert room_directory.rooms == ()


@pytest.mark.asyncio
async def test_select_default_picks_first_room_once(
    room_directory, mock_room_gateway, make_room
):
    rooms = [make_room(1), make_room(2)]
    mock_room_gateway.get_all.return_value = rooms
    await room_directory.list_rooms()

    assert room_directory.select_default() == rooms[0]
    room_directory.select(rooms[1])
    assert room_directory.select_default() is None
    assert room_directory.selected == rooms[1]


def test_select_default_without_rooms(room_directory):
    assert room_directory.select_default() is None
    assert room_directory.selected is None
