"""
Login Use Case

Checks backend user credentials.
"""

import bcrypt

from admin_panel.app.services.passwords import verify_password
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.domain.entities import BackendUserView
from admin_panel.libs.result import Error, Result, Return
from .dtos import LoginResponse


class LoginUseCase:
    """
    Use case for backend user login.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Same error for unknown email and wrong password
    - Session handling stays with the caller
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        async with self.uow:
            user = await self.uow.backend_users.get_by_email(email)

            if user is None:
                # Hash dummy password to maintain constant time
                bcrypt.checkpw(b"dummy_password", bcrypt.gensalt(12))
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            if not verify_password(password, user.password_hash):
                return Return.err(
                    Error("INVALID_CREDENTIALS", "Invalid email or password")
                )

            return Return.ok(LoginResponse(user=BackendUserView.from_user(user)))
