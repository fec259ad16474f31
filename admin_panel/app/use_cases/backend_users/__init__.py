"""
Backend User Management Use Cases
"""

from .list_backend_users_use_case import ListBackendUsersUseCase
from .get_backend_user_use_case import GetBackendUserUseCase
from .create_backend_user_use_case import CreateBackendUserUseCase
from .update_backend_user_use_case import UpdateBackendUserUseCase
from .delete_backend_user_use_case import DeleteBackendUserUseCase
from .dtos import (
    BackendUserForm,
    BackendUserFormOptions,
    BackendUserListResponse,
    BackendUserResponse,
)

__all__ = [
    # Use Cases
    "ListBackendUsersUseCase",
    "GetBackendUserUseCase",
    "CreateBackendUserUseCase",
    "UpdateBackendUserUseCase",
    "DeleteBackendUserUseCase",
    # DTOs
    "BackendUserForm",
    "BackendUserFormOptions",
    "BackendUserListResponse",
    "BackendUserResponse",
]
