"""
Request Password Reset Use Case

Handles issuing and mailing password reset tokens.
"""

import logging

from admin_panel.app.services.mailer import IMailer
from admin_panel.app.services.reset_token_manager import ResetTokenManager
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.config import AdminPanelConfig
from admin_panel.libs.result import Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)

RESET_REQUESTED_MESSAGE = "E-mail with instructions sent if user exists"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - No email enumeration: identical response whether or not the email
      belongs to a backend user
    - Previous tokens for the email are deleted in the same transaction
      that inserts the new one
    - Token expires after RESET_TOKEN_TTL_MINUTES (1 hour by default)
    - Mail goes out only after the token is committed
    """

    def __init__(self, uow: UnitOfWork, mailer: IMailer, config: AdminPanelConfig):
        self.uow = uow
        self.mailer = mailer
        self.tokens = ResetTokenManager(uow, config)

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        response = RequestPasswordResetResponse(status="sent", message=RESET_REQUESTED_MESSAGE)

        async with self.uow:
            user = await self.uow.backend_users.get_by_email(email)

            if user is None:
                # Return success but don't create a token or send mail
                return Return.ok(response)

            issued = await self.tokens.issue_token(email)
            await self.uow.commit()

        logger.info(f"Password reset requested for backend user {user.id}")
        await self.mailer.send_reset_password_mail(user, issued.token)

        return Return.ok(response)
