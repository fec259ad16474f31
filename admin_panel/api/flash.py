from fastapi import Request, status
from fastapi.responses import RedirectResponse

from admin_panel.api.middleware.session import SESSION_STATE_KEY
from admin_panel.app.services.session import SessionData, flash, set_fieldset

SUCCESS = "success"
ERROR = "error"


def get_session(request: Request) -> SessionData:
    session = getattr(request.state, SESSION_STATE_KEY, None)
    if session is None:
        raise RuntimeError("SessionCookieMiddleware is not installed")
    return session


def redirect_with_flash(
    request: Request,
    url: str,
    message: str,
    kind: str = SUCCESS,
    fieldset: dict = None,
) -> RedirectResponse:
    """Redirect (303, so a POST turns into a GET) carrying a one-shot message"""
    session = get_session(request)
    flash(session, kind, message)
    if fieldset is not None:
        set_fieldset(session, fieldset)
    return RedirectResponse(url, status_code=status.HTTP_303_SEE_OTHER)
