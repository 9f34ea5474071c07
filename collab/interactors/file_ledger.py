# collab/interactors/file_ledger.py
import logging
from typing import Dict, Optional, Tuple
from urllib.parse import quote

from collab.domain import schemas
from collab.domain.errors import AuthRequiredError, FetchError, ValidationError
from collab.gateways.interfaces import IFileGateway

Files = Tuple[schemas.SharedFile, ...]


class FileLedger:
    def __init__(
        self, file_gateway: IFileGateway, url_base: str = "https://example.com/files/"
    ):
        self.file_gateway = file_gateway
        self.url_base = url_base
        self.logger = logging.getLogger("CollabSync.FileLedger")
        self._files: Dict[int, Files] = {}

    def files(self, room_id: int) -> Files:
        return self._files.get(room_id, ())

    def placeholder_url(self, name: str) -> str:
        # no storage backend yet: the URL is derived from the display name
        return f"{self.url_base}{quote(name)}"

    async def list_files(self, room_id: int) -> Files:
        files = await self.file_gateway.get_all(room_id)
        self._files[room_id] = tuple(files)
        self.logger.info(f"Loaded {len(files)} files for room {room_id}")
        return self._files[room_id]

    async def attach(
        self,
        room_id: Optional[int],
        file_meta: schemas.FileMeta,
        identity: Optional[schemas.Identity],
    ) -> schemas.SharedFile:
        if identity is None:
            raise AuthRequiredError("Not authenticated")
        if room_id is None:
            raise ValidationError("Select a room before attaching a file")
        if not file_meta.name.strip():
            raise ValidationError("File name must not be empty")

        shared = await self.file_gateway.create_file(
            schemas.FileCreate(
                room_id=room_id,
                name=file_meta.name,
                description=file_meta.description or None,
                url=self.placeholder_url(file_meta.name),
                size_bytes=file_meta.size,
                mime_type=file_meta.mime_type,
            ),
            identity.id,
        )
        self.logger.info(f"Shared file {shared.name} in room {room_id}")

        try:
            await self.list_files(room_id)
        except FetchError as e:
            self.logger.error(f"Error fetching files after upload: {e!s}")
        return shared
