"""User repository: lookup, authentication and creation (tenant-scoped)."""

import asyncio

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from eventops.application.dtos.user import UserResult
from eventops.domain.enums import UserRole
from eventops.infrastructure.persistence.models.user import User
from eventops.infrastructure.persistence.repositories.base import BaseRepository
from eventops.infrastructure.security.password import (
    get_password_hash,
    verify_password,
)

# Verified against when the username is unknown so timing does not leak existence.
_DUMMY_HASH: str | None = None


async def _get_dummy_hash() -> str:
    global _DUMMY_HASH
    if _DUMMY_HASH is None:
        _DUMMY_HASH = await asyncio.to_thread(get_password_hash, "dummy-password")
    return _DUMMY_HASH


def _user_to_result(u: User) -> UserResult:
    return UserResult(
        id=u.id,
        tenant_id=u.tenant_id,
        username=u.username,
        email=u.email,
        role=u.role,
        is_active=u.is_active,
    )


class UserRepository(BaseRepository[User]):
    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    async def _get_by_username(self, tenant_id: str, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.tenant_id == tenant_id, User.username == username)
        )
        return result.scalar_one_or_none()

    async def get_by_id_and_tenant(
        self, user_id: str, tenant_id: str
    ) -> UserResult | None:
        row = await self.get_owned(user_id, tenant_id)
        return _user_to_result(row) if row else None

    async def authenticate(
        self, tenant_id: str, username: str, password: str
    ) -> UserResult | None:
        """Return the active user if the password matches; None otherwise."""
        user = await self._get_by_username(tenant_id, username)
        if user is None:
            await asyncio.to_thread(verify_password, password, await _get_dummy_hash())
            return None
        ok = await asyncio.to_thread(verify_password, password, user.hashed_password)
        if not ok or not user.is_active:
            return None
        return _user_to_result(user)

    async def create_user(
        self,
        tenant_id: str,
        username: str,
        email: str,
        password: str,
        role: str = UserRole.STAFF.value,
    ) -> UserResult:
        hashed = await asyncio.to_thread(get_password_hash, password)
        created = await self.create(
            User(
                tenant_id=tenant_id,
                username=username,
                email=email,
                hashed_password=hashed,
                role=role,
                is_active=True,
            )
        )
        return _user_to_result(created)
