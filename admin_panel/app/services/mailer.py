from abc import ABC, abstractmethod
from typing import Optional

from admin_panel.domain.entities import BackendUser


class IMailer(ABC):
    """Outgoing mail for backend users. Fire-and-forget from the caller's side."""

    @abstractmethod
    async def send_welcome_mail(self, user: BackendUser, password: Optional[str] = None):
        """Welcome a new user, including the generated password when there is one"""
        pass

    @abstractmethod
    async def send_reset_password_mail(self, user: BackendUser, token: str):
        """Send the reset link carrying the plaintext token"""
        pass
