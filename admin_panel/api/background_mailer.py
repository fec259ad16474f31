import logging
from typing import Optional

from fastapi import BackgroundTasks

from admin_panel.app.services.mailer import IMailer
from admin_panel.domain.entities import BackendUser

logger = logging.getLogger(__name__)


class BackgroundMailer(IMailer):
    """
    Queues mail on the response's background tasks.

    Delivery runs after the response is sent, so a slow or failing mail
    server never changes what the client sees. Failures are logged.
    """

    def __init__(self, mailer: IMailer, background_tasks: BackgroundTasks):
        self.mailer = mailer
        self.background_tasks = background_tasks

    async def send_welcome_mail(self, user: BackendUser, password: Optional[str] = None):
        self.background_tasks.add_task(
            _deliver, "welcome", user.id, self.mailer.send_welcome_mail, user, password
        )

    async def send_reset_password_mail(self, user: BackendUser, token: str):
        self.background_tasks.add_task(
            _deliver, "reset password", user.id, self.mailer.send_reset_password_mail, user, token
        )


async def _deliver(kind: str, user_id: Optional[int], send, *args) -> None:
    try:
        await send(*args)
    except Exception:
        logger.exception(f"Failed to send {kind} mail to backend user {user_id}")
