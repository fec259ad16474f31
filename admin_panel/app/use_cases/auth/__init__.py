"""
Authentication Use Cases

Login and password reset business logic.
"""

from .login_use_case import LoginUseCase
from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    LoginResponse,
    RequestPasswordResetResponse,
    ResetPasswordCommand,
    ResetPasswordResponse,
)

__all__ = [
    # Use Cases
    "LoginUseCase",
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "ResetPasswordCommand",
    # DTOs - Responses
    "LoginResponse",
    "RequestPasswordResetResponse",
    "ResetPasswordResponse",
]
