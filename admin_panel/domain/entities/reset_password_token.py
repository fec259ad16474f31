"""
BackendUserResetPasswordToken Entity

Single-use, time-limited password reset tokens.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from admin_panel.domain.base import utcnow


class BackendUserResetPasswordToken(SQLModel, table=True):
    """
    Password reset token tied to an email address.

    Business Rules:
    - Token is a 64 character alphanumeric secret; only its SHA-256 hash is stored
    - Expires one hour after issuance by default
    - Single-use: used_at is set once and never cleared
    - One row per email; issuing a new token deletes the previous ones
    - Email need not belong to an existing backend user
    """

    __tablename__ = "backend_user_reset_password_tokens"

    id: Optional[int] = Field(default=None, primary_key=True)

    email: str = Field(unique=True, max_length=191)
    token_hash: str = Field(unique=True, max_length=64)  # SHA-256 output

    # Timestamps
    expire_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_reset_token_expire_at", "expire_at"),)

    def can_be_used(self, now: Optional[datetime] = None) -> bool:
        """Usable iff never consumed and the expiry lies in the future"""
        now = now or utcnow()
        if self.used_at is not None:
            return False
        return now < self.expire_at
