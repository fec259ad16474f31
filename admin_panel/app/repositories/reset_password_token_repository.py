from abc import ABC, abstractmethod
from typing import Optional

from admin_panel.domain.entities import BackendUserResetPasswordToken


class IResetPasswordTokenRepository(ABC):
    """BackendUserResetPasswordToken repository interface - application layer"""

    @abstractmethod
    async def create(
        self, token: BackendUserResetPasswordToken
    ) -> BackendUserResetPasswordToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_by_token_hash(
        self, token_hash: str
    ) -> Optional[BackendUserResetPasswordToken]:
        """Get password reset token by token hash"""
        pass

    @abstractmethod
    async def delete_by_email(self, email: str) -> int:
        """Delete every token issued for email, returning the number removed"""
        pass

    @abstractmethod
    async def update(
        self, token: BackendUserResetPasswordToken
    ) -> BackendUserResetPasswordToken:
        """Update existing password reset token"""
        pass
