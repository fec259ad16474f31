from typing import List, Optional, Tuple

import bcrypt
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from admin_panel.app.services.mailer import IMailer
from admin_panel.domain.entities import BackendUser


class RecordingMailer(IMailer):
    """Keeps outgoing mail in memory so tests can read tokens and passwords"""

    def __init__(self):
        self.welcome: List[Tuple[str, Optional[str]]] = []
        self.reset: List[Tuple[str, str]] = []

    async def send_welcome_mail(self, user: BackendUser, password: Optional[str] = None):
        self.welcome.append((user.email, password))

    async def send_reset_password_mail(self, user: BackendUser, token: str):
        self.reset.append((user.email, token))


class FailingMailer(IMailer):
    """Mail server that is down"""

    async def send_welcome_mail(self, user: BackendUser, password: Optional[str] = None):
        raise ConnectionError("SMTP server unreachable")

    async def send_reset_password_mail(self, user: BackendUser, token: str):
        raise ConnectionError("SMTP server unreachable")


async def create_backend_user(
    db_session: AsyncSession,
    email: str = "admin@example.com",
    password: str = "Secret123",
    role: str = "admin",
    should_reset_password: bool = False,
    name: str = "Test Admin",
) -> int:
    """Insert a backend user and return its id"""
    user = BackendUser(
        name=name,
        email=email,
        password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode(),
        role=role,
        should_reset_password=should_reset_password,
    )
    db_session.add(user)
    await db_session.commit()
    await db_session.refresh(user)
    return user.id


async def login(client: AsyncClient, email: str, password: str = "Secret123", next: str = None):
    params = {"next": next} if next else None
    return await client.post(
        "/admin/login", params=params, data={"email": email, "password": password}
    )
