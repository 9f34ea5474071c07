# collab/tests/unit/test_file_ledger.py
from unittest.mock import AsyncMock, Mock

import pytest

from collab.domain import schemas
from collab.domain.errors import AuthRequiredError, FetchError, ValidationError
from collab.gateways.interfaces import IFileGateway
from collab.interactors.file_ledger import FileLedger


@pytest.fixture
def mock_file_gateway():
    gateway = Mock(spec=IFileGateway)
    gateway.get_all = AsyncMock(return_value=[])
    gateway.create_file = AsyncMock()
    return gateway


@pytest.fixture
def file_ledger(mock_file_gateway):
    return FileLedger(mock_file_gateway)


def test_placeholder_url_quotes_name(file_ledger):
    assert file_ledger.placeholder_url("notes.txt") == "https://example.com/files/notes.txt"
    assert (
        file_ledger.placeholder_url("q3 report.pdf")
        == "https://example.com/files/q3%20report.pdf"
    )


def test_placeholder_url_uses_configured_base(mock_file_gateway):
    ledger = FileLedger(mock_file_gateway, url_base="https://cdn.test/")
    assert ledger.placeholder_url("a.png") == "https://cdn.test/a.png"


@pytest.mark.asyncio
async def test_list_files(file_ledger, mock_file_gateway, make_file):
    files = [make_file(2, room_id=1), make_file(1, room_id=1)]
    mock_file_gateway.get_all.return_value = files

    result = await file_ledger.list_files(1)

    mock_file_gateway.get_all.assert_called_once_with(1)
    assert result == tuple(files)
    assert file_ledger.files(1) == tuple(files)
    assert file_ledger.files(2) == ()


@pytest.mark.asyncio
async def test_attach_requires_identity(file_ledger, mock_file_gateway):
    with pytest.raises(AuthRequiredError):
        await file_ledger.attach(1, schemas.FileMeta(name="a.txt"), None)
    mock_file_gateway.create_file.assert_not_called()


@pytest.mark.asyncio
async def test_attach_requires_room(file_ledger, mock_file_gateway, identity):
    with pytest.raises(ValidationError):
        await file_ledger.attach(None, schemas.FileMeta(name="a.txt"), identity)
    mock_file_gateway.create_file.assert_not_called()


@pytest.mark.asyncio
async def test_attach_requires_name(file_ledger, mock_file_gateway, identity):
    with pytest.raises(ValidationError):
        await file_ledger.attach(1, schemas.FileMeta(name="  "), identity)
    mock_file_gateway.create_file.assert_not_called()


@pytest.mark.asyncio
async def test_attach_records_metadata_and_relists(
    file_ledger, mock_file_gateway, identity, make_file
):
    shared = make_file(3, room_id=1, name="design brief.pdf")
    mock_file_gateway.create_file.return_value = shared
    mock_file_gateway.get_all.return_value = [shared]

    result = await file_ledger.attach(
        1,
        schemas.FileMeta(name="design brief.pdf", size=2048, mime_type="application/pdf"),
        identity,
    )

    assert result == shared
    mock_file_gateway.create_file.assert_called_once_with(
        schemas.FileCreate(
            room_id=1,
            name="design brief.pdf",
            description=None,
            url="https://example.com/files/design%20brief.pdf",
            size_bytes=2048,
            mime_type="application/pdf",
        ),
        "user-1",
    )
    assert file_ledger.files(1) == (shared,)


@pytest.mark.asyncio
async def test_attach_survives_failed_relist(
    file_ledger, mock_file_gateway, identity, make_file
):
    shared = make_file(3, room_id=1)
    mock_file_gateway.create_file.return_value = shared
    mock_file_gateway.get_all.side_effect = FetchError("timeout")

    result = await file_ledger.attach(1, schemas.FileMeta(name="a.txt"), identity)

    assert result == shared
    assert file_ledger.files(1) == ()
