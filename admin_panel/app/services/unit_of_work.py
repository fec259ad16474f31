from abc import ABC, abstractmethod

from admin_panel.app.repositories.backend_user_repository import IBackendUserRepository
from admin_panel.app.repositories.reset_password_token_repository import (
    IResetPasswordTokenRepository,
)


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    backend_users: IBackendUserRepository
    reset_password_tokens: IResetPasswordTokenRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
