# collab/interactors/permission_interactor.py
from typing import List, Optional

from collab.domain import schemas
from collab.domain.errors import AuthRequiredError, PermissionDeniedError
from collab.gateways.interfaces import IRoleGateway


class PermissionInteractor:
    def __init__(self, role_gateway: IRoleGateway):
        self.role_gateway = role_gateway

    async def get_role(
        self, identity: Optional[schemas.Identity]
    ) -> Optional[schemas.Role]:
        if identity is None:
            return None
        user_role = await self.role_gateway.get_role(identity.id)
        return user_role.role if user_role else None

    async def list_members(self) -> List[schemas.MemberRole]:
        return await self.role_gateway.get_members()

    async def update_role(
        self,
        identity: Optional[schemas.Identity],
        user_id: str,
        role: schemas.Role,
    ) -> Optional[schemas.UserRole]:
        if identity is None:
            raise AuthRequiredError("Not authenticated")
        if await self.get_role(identity) != schemas.Role.ADMIN:
            raise PermissionDeniedError(
                "You need admin privileges to manage user roles."
            )
        return await self.role_gateway.update_role(user_id, role)

    async def get_profile(
        self, identity: Optional[schemas.Identity]
    ) -> Optional[schemas.UserProfile]:
        if identity is None:
            return None
        return await self.role_gateway.get_profile(identity.id)
