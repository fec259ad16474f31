"""
Reset Token Manager

Issues, validates and consumes single-use password reset tokens.
"""

import hashlib
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from admin_panel.app.errors import InvalidOrExpiredError, NotFoundError
from admin_panel.app.services.passwords import random_alphanumeric
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.config import AdminPanelConfig
from admin_panel.domain.base import utcnow
from admin_panel.domain.entities import BackendUserResetPasswordToken
from admin_panel.libs.result import Result, Return

logger = logging.getLogger(__name__)

TOKEN_LENGTH = 64


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


@dataclass(frozen=True)
class IssuedResetToken:
    """Plaintext token paired with its stored record. Only ever mailed, never stored."""

    token: str
    record: BackendUserResetPasswordToken


class ResetTokenManager:
    """
    Token lifecycle for password resets.

    Business Rules:
    - At most one token row per email; issuing deletes the previous ones
    - Token is 64 random alphanumeric characters from the secrets module
    - Token is usable iff used_at is unset and now < expire_at
    - Consumption sets used_at exactly once

    The manager works inside the caller's unit of work and never commits,
    so delete + insert and consume + password update land in one transaction.
    """

    def __init__(self, uow: UnitOfWork, config: AdminPanelConfig):
        self.uow = uow
        self.config = config

    async def issue_token(self, email: str) -> IssuedResetToken:
        removed = await self.uow.reset_password_tokens.delete_by_email(email)
        if removed:
            logger.info(f"Invalidated {removed} previous reset token(s)")

        token = random_alphanumeric(TOKEN_LENGTH)
        now = utcnow()
        record = BackendUserResetPasswordToken(
            email=email,
            token_hash=hash_token(token),
            expire_at=now + timedelta(minutes=self.config.RESET_TOKEN_TTL_MINUTES),
            created_at=now,
            updated_at=now,
        )
        record = await self.uow.reset_password_tokens.create(record)
        return IssuedResetToken(token=token, record=record)

    async def validate_token(
        self, token: Optional[str]
    ) -> Result[BackendUserResetPasswordToken]:
        if not token:
            return Return.err(NotFoundError(message="Token does not exist"))

        record = await self.uow.reset_password_tokens.get_by_token_hash(hash_token(token))
        if record is None:
            return Return.err(NotFoundError(message="Token does not exist"))

        if not record.can_be_used():
            return Return.err(InvalidOrExpiredError(message="Token is invalid or expired"))

        return Return.ok(record)

    async def consume(
        self, record: BackendUserResetPasswordToken
    ) -> BackendUserResetPasswordToken:
        """Mark a validated token as used"""
        now = utcnow()
        record.used_at = now
        record.updated_at = now
        return await self.uow.reset_password_tokens.update(record)
