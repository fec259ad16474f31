import logging
from typing import Optional

from admin_panel.app.services.mailer import IMailer
from admin_panel.config import AdminPanelConfig
from admin_panel.domain.entities import BackendUser

logger = logging.getLogger(__name__)


def redact_email(email: str) -> str:
    if "@" not in email:
        return "redacted"
    local, domain = email.split("@", 1)
    return f"{local[:2]}***@{domain}"


class LoggingMailer(IMailer):
    """
    Mailer that writes outgoing mail to the log instead of sending it.

    Default for development; host applications plug in a real IMailer.
    """

    def __init__(self, config: AdminPanelConfig):
        self.config = config

    def reset_link(self, token: str) -> str:
        return self.config.BASE_URL.rstrip("/") + self.config.url(f"/login/reset/{token}")

    async def send_welcome_mail(self, user: BackendUser, password: Optional[str] = None):
        logger.info(
            f"Welcome mail to {redact_email(user.email)} "
            f"(generated password included: {password is not None})"
        )

    async def send_reset_password_mail(self, user: BackendUser, token: str):
        logger.info(f"Reset password mail to {redact_email(user.email)}: {self.reset_link(token)}")
