"""
Authentication Use Case DTOs (Data Transfer Objects)

Command and Response classes for the login and password reset flows.
"""

from pydantic import BaseModel

from admin_panel.domain.entities import BackendUserView


# ============================================================================
# Command DTOs
# ============================================================================


class ResetPasswordCommand(BaseModel):
    """Submitted new-password form bound to a reset token"""

    token: str
    email: str
    password: str
    password_repeat: str


# ============================================================================
# Response DTOs
# ============================================================================


class LoginResponse(BaseModel):
    """Response for backend user login use case"""

    user: BackendUserView


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ResetPasswordResponse(BaseModel):
    """Response for reset password use case"""

    status: str
    message: str
