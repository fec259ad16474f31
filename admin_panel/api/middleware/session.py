"""Middleware that loads the signed session cookie and writes it back when changed."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from admin_panel.api.utils.session_token import decode_session, encode_session
from admin_panel.app.services.session import SessionData
from admin_panel.config import AdminPanelConfig

SESSION_STATE_KEY = "admin_session"


class SessionCookieMiddleware(BaseHTTPMiddleware):
    """Expose the session as request.state.admin_session for the whole request.

    Tampered or expired cookies silently start an empty session.
    """

    def __init__(self, app: ASGIApp, config: AdminPanelConfig) -> None:
        super().__init__(app)
        self.config = config

    async def dispatch(self, request, call_next):  # type: ignore[override]
        cookie = request.cookies.get(self.config.SESSION_COOKIE_NAME)
        data = decode_session(cookie, self.config) if cookie else None
        session = SessionData(data)
        setattr(request.state, SESSION_STATE_KEY, session)

        response = await call_next(request)

        if session.modified:
            contents = session.to_dict()
            if contents:
                response.set_cookie(
                    self.config.SESSION_COOKIE_NAME,
                    encode_session(contents, self.config),
                    max_age=self.config.SESSION_MAX_AGE_SECONDS,
                    httponly=True,
                    samesite="lax",
                    secure=self.config.SESSION_COOKIE_SECURE,
                )
            else:
                response.delete_cookie(self.config.SESSION_COOKIE_NAME)
        return response

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(cookie={self.config.SESSION_COOKIE_NAME!r})"
