from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from admin_panel.app.repositories.backend_user_repository import IBackendUserRepository
from admin_panel.domain.entities import BackendUser


class BackendUserRepository(IBackendUserRepository):
    """BackendUser repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[BackendUser]:
        stmt = select(BackendUser).where(BackendUser.email == email)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: int) -> Optional[BackendUser]:
        stmt = select(BackendUser).where(BackendUser.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def first(self) -> Optional[BackendUser]:
        stmt = select(BackendUser).order_by(BackendUser.id).limit(1)
        result = await self.session.exec(stmt)
        return result.first()

    async def list(self, name: Optional[str] = None) -> List[BackendUser]:
        stmt = select(BackendUser)
        if name:
            stmt = stmt.where(BackendUser.name == name)
        result = await self.session.exec(stmt.order_by(BackendUser.id))
        return list(result.all())

    async def create(self, user: BackendUser) -> BackendUser:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: BackendUser) -> BackendUser:
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def delete(self, user: BackendUser) -> None:
        await self.session.delete(user)
        await self.session.flush()
