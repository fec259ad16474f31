from sqlmodel.ext.asyncio.session import AsyncSession

from admin_panel.adapter.repositories.backend_user_repository import BackendUserRepository
from admin_panel.adapter.repositories.reset_password_token_repository import (
    ResetPasswordTokenRepository,
)
from admin_panel.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        self.backend_users = BackendUserRepository(self.session)
        self.reset_password_tokens = ResetPasswordTokenRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed inside the block is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
