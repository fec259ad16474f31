"""
Request Authentication Guard

Runs once at the entry of every protected route.
"""

import logging
from urllib.parse import quote

from admin_panel.app.errors import GuardRedirect
from admin_panel.app.services.session import SessionAuthenticator, SessionData
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.config import AdminPanelConfig
from admin_panel.domain.entities import BackendUser, BackendUserView
from admin_panel.libs.result import Result, Return

logger = logging.getLogger(__name__)


class RequestAuthenticationGuard:
    """
    Resolve the backend user for a protected request.

    Outcomes:
    - Ok(BackendUserView): continue to the handler
    - Err(GuardRedirect): short-circuit with a redirect and flash message

    Rules:
    - A user flagged should_reset_password only reaches their own edit
      form and the update submission
    - Without a session, the first backend user is logged in automatically
      when ENVIRONMENT is "local" and AUTO_LOGIN_FIRST_USER is set
    - Otherwise redirect to the login page with next=<requested path>
    """

    def __init__(
        self,
        uow: UnitOfWork,
        authenticator: SessionAuthenticator,
        config: AdminPanelConfig,
    ):
        self.uow = uow
        self.authenticator = authenticator
        self.config = config

    def edit_profile_path(self, user_id: int) -> str:
        return self.config.url(f"/backend_users/edit/{user_id}")

    def update_profile_path(self) -> str:
        return self.config.url("/backend_users/update")

    def login_path(self, next_path: str) -> str:
        return self.config.url("/login") + "?next=" + quote(next_path)

    async def check(self, path: str, session: SessionData) -> Result[BackendUserView]:
        async with self.uow:
            resolved = await self.authenticator.current_user(session)

            if resolved.is_ok():
                return self._check_authenticated(resolved.value, path)

            if self.config.is_local and self.config.AUTO_LOGIN_FIRST_USER:
                user = await self.uow.backend_users.first()
                if user is not None:
                    logger.warning(f"Auto-login as backend user {user.id} (local environment)")
                    self.authenticator.authenticate(session, user)
                    return Return.ok(BackendUserView.from_user(user))

        return Return.err(
            GuardRedirect(self.login_path(path), "Session expired login again")
        )

    def _check_authenticated(self, user: BackendUser, path: str) -> Result[BackendUserView]:
        if user.should_reset_password:
            edit_path = self.edit_profile_path(user.id)
            if path not in (edit_path, self.update_profile_path()):
                return Return.err(GuardRedirect(edit_path, "Please change your password"))

        return Return.ok(BackendUserView.from_user(user))
