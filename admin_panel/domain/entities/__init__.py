"""
Admin Panel Domain Entities

Each entity in its own file.
"""

from .backend_user import BackendUser, BackendUserView
from .reset_password_token import BackendUserResetPasswordToken

__all__ = [
    "BackendUser",
    "BackendUserView",
    "BackendUserResetPasswordToken",
]
