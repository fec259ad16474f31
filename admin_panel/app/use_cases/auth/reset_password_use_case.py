"""
Reset Password Use Case

Consumes a reset token and overwrites the backend user's password.
"""

import logging

from admin_panel.app.errors import NotFoundError, ValidationError
from admin_panel.app.services.passwords import hash_password, validate_new_password
from admin_panel.app.services.reset_token_manager import ResetTokenManager
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.config import AdminPanelConfig
from admin_panel.domain.base import utcnow
from admin_panel.libs.result import Result, Return
from .dtos import ResetPasswordCommand, ResetPasswordResponse

logger = logging.getLogger(__name__)


class ResetPasswordUseCase:
    """
    Use case for consuming a password reset token.

    Validation order:
    1. Token exists
    2. Token is unused and not expired
    3. Submitted email equals the token's email
    4. password equals password_repeat
    5. Password meets the minimum length
    6. A backend user with that email exists

    Any failure leaves the token untouched so it can be retried.
    On success the token is marked used and the password replaced in
    one transaction, and should_reset_password is cleared.
    """

    def __init__(self, uow: UnitOfWork, config: AdminPanelConfig):
        self.uow = uow
        self.config = config
        self.tokens = ResetTokenManager(uow, config)

    async def execute(self, command: ResetPasswordCommand) -> Result[ResetPasswordResponse]:
        async with self.uow:
            validated = await self.tokens.validate_token(command.token)
            if validated.is_err():
                return Return.err(validated.error)
            token = validated.value

            if token.email != command.email:
                return Return.err(
                    ValidationError("EMAIL_MISMATCH", "Token does not match email")
                )

            password_check = validate_new_password(
                command.password, command.password_repeat, self.config.PASSWORD_MIN_LENGTH
            )
            if password_check.is_err():
                return Return.err(password_check.error)

            user = await self.uow.backend_users.get_by_email(command.email)
            if user is None:
                return Return.err(NotFoundError(message="User was not found"))

            await self.tokens.consume(token)

            user.password_hash = hash_password(command.password)
            user.should_reset_password = False
            user.updated_at = utcnow()
            await self.uow.backend_users.update(user)

            await self.uow.commit()

            logger.info(f"Password reset completed for backend user {user.id}")

            return Return.ok(
                ResetPasswordResponse(status="success", message="Password is reset")
            )
