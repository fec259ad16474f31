"""
BackendUser Entity

Administrative account allowed into the admin panel.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from sqlmodel import Column, DateTime, Field, SQLModel

from admin_panel.domain.base import utcnow


class BackendUser(SQLModel, table=True):
    """
    BackendUser entity - an admin panel account.

    Business Rules:
    - Email must be unique across all backend users
    - Password stored as bcrypt hash (cost factor 12)
    - Role is one of the configured roles, ordered by privilege
    - should_reset_password locks the user onto their own profile form
      until the password is changed
    """

    __tablename__ = "backend_users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=191)
    email: str = Field(unique=True, index=True, max_length=191)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars
    role: str = Field(default="user", max_length=64)

    should_reset_password: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))


class BackendUserView(BaseModel):
    """Read-only snapshot of the authenticated user for one request"""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    email: str
    role: str
    should_reset_password: bool

    @classmethod
    def from_user(cls, user: BackendUser) -> "BackendUserView":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            should_reset_password=user.should_reset_password,
        )
