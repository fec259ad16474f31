from typing import Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from admin_panel.app.repositories.reset_password_token_repository import (
    IResetPasswordTokenRepository,
)
from admin_panel.domain.entities import BackendUserResetPasswordToken


class ResetPasswordTokenRepository(IResetPasswordTokenRepository):
    """BackendUserResetPasswordToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self, token: BackendUserResetPasswordToken
    ) -> BackendUserResetPasswordToken:
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_token_hash(
        self, token_hash: str
    ) -> Optional[BackendUserResetPasswordToken]:
        stmt = select(BackendUserResetPasswordToken).where(
            BackendUserResetPasswordToken.token_hash == token_hash
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def delete_by_email(self, email: str) -> int:
        stmt = delete(BackendUserResetPasswordToken).where(
            BackendUserResetPasswordToken.email == email
        )
        result = await self.session.exec(stmt)
        return result.rowcount or 0

    async def update(
        self, token: BackendUserResetPasswordToken
    ) -> BackendUserResetPasswordToken:
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token
