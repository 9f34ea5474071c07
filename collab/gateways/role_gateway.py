# collab/gateways/role_gateway.py
from typing import List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from collab.domain import schemas
from collab.domain.errors import FetchError
from collab.gateways.interfaces import IRoleGateway
from collab.infrastructure import models
from collab.infrastructure.database import Database


class RoleGateway(IRoleGateway):
    def __init__(self, database: Database):
        self.database = database

    async def get_role(self, user_id: str) -> Optional[schemas.UserRole]:
        stmt = select(models.UserRole).filter(models.UserRole.user_id == user_id)
        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                role = result.scalar_one_or_none()
                return schemas.UserRole.model_validate(role) if role else None
        except SQLAlchemyError as e:
            raise FetchError(f"Failed to fetch role for user {user_id}: {e!s}") from e

    async def get_members(self) -> List[schemas.MemberRole]:
        stmt = (
            select(models.UserRole, models.UserProfile)
            .outerjoin(
                models.UserProfile,
                models.UserProfile.user_id == models.UserRole.user_id,
            )
            .order_by(models.UserRole.created_at.asc(), models.UserRole.id.asc())
        )
        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                return [
                    schemas.MemberRole(
                        id=role.id,
                        user_id=role.user_id,
                        role=role.role,
                        created_at=role.created_at,
                        full_name=profile.full_name if profile else None,
                        job_title=profile.job_title if profile else None,
                        department=profile.department if profile else None,
                    )
                    for role, profile in result.all()
                ]
        except SQLAlchemyError as e:
            raise FetchError(f"Failed to fetch user roles: {e!s}") from e

    async def update_role(
        self, user_id: str, role: schemas.Role
    ) -> Optional[schemas.UserRole]:
        stmt = (
            update(models.UserRole)
            .where(models.UserRole.user_id == user_id)
            .values(role=role.value)
        )
        try:
            async with self.database.session() as session:
                await session.execute(stmt)
                await session.commit()
        except SQLAlchemyError as e:
            raise FetchError(f"Failed to update role for user {user_id}: {e!s}") from e
        return await self.get_role(user_id)

    async def get_profile(self, user_id: str) -> Optional[schemas.UserProfile]:
        stmt = select(models.UserProfile).filter(models.UserProfile.user_id == user_id)
        try:
            async with self.database.session() as session:
                result = await session.execute(stmt)
                profile = result.scalar_one_or_none()
                return schemas.UserProfile.model_validate(profile) if profile else None
        except SQLAlchemyError as e:
            raise FetchError(
                f"Failed to fetch profile for user {user_id}: {e!s}"
            ) from e
