"""
Session State

Per-request session data plus the typed accessor that resolves the
authenticated backend user from it.
"""

from typing import Any, Dict, List, Optional, Union

from admin_panel.app.errors import SessionExpiredError
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.domain.entities import BackendUser, BackendUserView
from admin_panel.libs.result import Result, Return

USER_KEY = "backend_user_id"
FLASH_KEY = "_flash"
FIELDSET_KEY = "fieldset"


class SessionData:
    """Mutable session mapping that remembers whether it was changed"""

    def __init__(self, data: Optional[Dict[str, Any]] = None):
        self._data: Dict[str, Any] = dict(data or {})
        self.modified = False

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def __contains__(self, key: str) -> bool:
        return key in self._data

    def __setitem__(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.modified = True

    def pop(self, key: str, default: Any = None) -> Any:
        if key in self._data:
            self.modified = True
        return self._data.pop(key, default)

    def clear(self) -> None:
        if self._data:
            self.modified = True
        self._data.clear()

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)


def flash(session: SessionData, kind: str, message: str) -> None:
    """Queue a one-shot message for the next rendered page"""
    session[FLASH_KEY] = session.get(FLASH_KEY, []) + [{"kind": kind, "message": message}]


def pop_flashes(session: SessionData) -> List[Dict[str, str]]:
    return session.pop(FLASH_KEY, [])


def set_fieldset(session: SessionData, fieldset: Dict[str, Any]) -> None:
    session[FIELDSET_KEY] = fieldset


def pop_fieldset(session: SessionData) -> Dict[str, Any]:
    return session.pop(FIELDSET_KEY, {})


class SessionAuthenticator:
    """Authenticate, unauthenticate and resolve the session's backend user"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    def authenticate(
        self, session: SessionData, user: Union[BackendUser, BackendUserView]
    ) -> None:
        session[USER_KEY] = user.id

    def unauthenticate(self, session: SessionData) -> None:
        session.pop(USER_KEY)

    async def current_user(self, session: SessionData) -> Result[BackendUser]:
        """
        Resolve the authenticated backend user.

        Must run inside an open unit of work. Never raises for a missing
        or stale session; returns SessionExpiredError instead.
        """
        user_id = session.get(USER_KEY)
        if user_id is None:
            return Return.err(SessionExpiredError(message="No authenticated user"))

        user = await self.uow.backend_users.get_by_id(user_id)
        if user is None:
            # User was deleted while logged in
            self.unauthenticate(session)
            return Return.err(SessionExpiredError(message="Authenticated user no longer exists"))

        return Return.ok(user)
