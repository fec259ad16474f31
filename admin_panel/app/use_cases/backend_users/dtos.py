"""
Backend User Use Case DTOs
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, EmailStr, Field


class BackendUserForm(BaseModel):
    """
    Submitted create/update form.

    Shape checks live here; role, password policy and email uniqueness
    depend on configuration and storage and are checked by the use cases.
    """

    name: str = Field(..., min_length=1, max_length=191)
    email: EmailStr
    role: Optional[str] = None
    password: str = ""
    password_repeat: str = ""
    random_password: bool = False
    should_reset_password: bool = False
    send_mail: bool = False


class BackendUserResponse(BaseModel):
    id: int
    name: str
    email: str
    role: str
    should_reset_password: bool
    created_at: datetime
    updated_at: datetime


class BackendUserListResponse(BaseModel):
    users: List[BackendUserResponse]


class BackendUserFormOptions(BaseModel):
    """Choices the acting user gets on the create/edit form"""

    roles: Dict[str, str]
    default_role: str
