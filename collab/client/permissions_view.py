import logging
from typing import List, Optional

from collab.domain import schemas
from collab.domain.errors import CollabError
from collab.infrastructure.session import SessionProvider
from collab.interactors.permission_interactor import PermissionInteractor


class PermissionsView:
    """Member roles screen. Failures are kept as inline error text."""

    def __init__(
        self, interactor: PermissionInteractor, session_provider: SessionProvider
    ) -> None:
        self.interactor = interactor
        self.session_provider = session_provider
        self.logger = logging.getLogger("CollabSync.PermissionsView")

        self.members: List[schemas.MemberRole] = []
        self.current_role: Optional[schemas.Role] = None
        self.profile: Optional[schemas.UserProfile] = None
        self.error: Optional[str] = None
        self.loading = True

    @property
    def can_manage_roles(self) -> bool:
        return self.current_role == schemas.Role.ADMIN

    @property
    def display_name(self) -> Optional[str]:
        """Profile name of the signed-in user, falling back to their email."""
        if self.profile is not None:
            return self.profile.full_name
        identity = self.session_provider.get_current_user()
        return identity.email if identity else None

    async def load(self) -> None:
        identity = self.session_provider.get_current_user()
        try:
            self.members = await self.interactor.list_members()
            self.current_role = await self.interactor.get_role(identity)
            self.profile = await self.interactor.get_profile(identity)
            self.error = None
        except CollabError as e:
            self.logger.error(f"Error loading members: {e!s}")
            self.error = str(e) or "An error occurred"
        finally:
            self.loading = False

    async def change_role(self, user_id: str, role: schemas.Role) -> bool:
        identity = self.session_provider.get_current_user()
        try:
            await self.interactor.update_role(identity, user_id, role)
        except CollabError as e:
            self.logger.error(f"Error updating role for {user_id}: {e!s}")
            self.error = str(e) or "Failed to update role"
            return False
        await self.load()
        return True
