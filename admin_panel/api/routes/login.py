import logging
from typing import Optional

from fastapi import APIRouter, Depends, Form, Request, status
from sqlalchemy.exc import IntegrityError

from admin_panel.api.error import ClientError, ServerError
from admin_panel.api.flash import ERROR, SUCCESS, get_session, redirect_with_flash
from admin_panel.api.views import ViewRenderer
from admin_panel.app.errors import ConfigurationError, ValidationError
from admin_panel.app.services.mailer import IMailer
from admin_panel.app.services.reset_token_manager import ResetTokenManager
from admin_panel.app.services.session import SessionAuthenticator
from admin_panel.app.services.sso import SSOProvider
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.app.use_cases.auth import (
    LoginUseCase,
    RequestPasswordResetUseCase,
    ResetPasswordCommand,
    ResetPasswordUseCase,
)
from admin_panel.config import AdminPanelConfig
from admin_panel.depends import (
    get_authenticator,
    get_config,
    get_background_mailer,
    get_renderer,
    get_sso_provider,
    get_unit_of_work,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Login"])


def _safe_next(next_path: Optional[str]) -> Optional[str]:
    """Only same-site absolute paths are accepted as post-login targets"""
    if next_path and next_path.startswith("/") and not next_path.startswith("//"):
        return next_path
    return None


@router.get("")
async def landing(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    authenticator: SessionAuthenticator = Depends(get_authenticator),
    config: AdminPanelConfig = Depends(get_config),
):
    """Send authenticated users to the dashboard and everyone else to the login form"""
    async with uow:
        resolved = await authenticator.current_user(get_session(request))
        if resolved.is_ok():
            return redirect_with_flash(
                request, config.url("/dashboard"), f"Logged in as {resolved.value.email}"
            )

    return redirect_with_flash(request, config.url("/login"), "Please login", ERROR)


@router.get("/login")
async def login_form(
    request: Request,
    next: Optional[str] = None,
    renderer: ViewRenderer = Depends(get_renderer),
):
    return renderer.render(request, "Login/login", {"next": next})


@router.post("/login")
async def login_submit(
    request: Request,
    next: Optional[str] = None,
    email: str = Form(""),
    password: str = Form(""),
    uow: UnitOfWork = Depends(get_unit_of_work),
    authenticator: SessionAuthenticator = Depends(get_authenticator),
    config: AdminPanelConfig = Depends(get_config),
):
    """
    Local email/password login.

    Redirects to next (same-site paths only) or the dashboard on success,
    back to the login form with "Failed to login" otherwise.
    """
    if not email or not password:
        login_url = config.url("/login")
        if _safe_next(next):
            login_url = f"{login_url}?next={next}"
        return redirect_with_flash(request, login_url, "Missing username or password", ERROR)

    use_case = LoginUseCase(uow)
    result = await use_case.execute(email, password)

    if result.is_err():
        logger.info(f"Failed backend login: {result.error.code}")
        return redirect_with_flash(request, config.url("/login"), "Failed to login", ERROR)

    authenticator.authenticate(get_session(request), result.value.user)

    redirect = _safe_next(next) or config.url("/dashboard")
    return redirect_with_flash(request, redirect, f"Logged in as {email}")


@router.get("/login/reset")
async def reset_password_form(
    request: Request, renderer: ViewRenderer = Depends(get_renderer)
):
    return renderer.render(request, "Login/reset")


@router.post("/login/reset")
async def reset_password_submit(
    request: Request,
    email: str = Form(""),
    uow: UnitOfWork = Depends(get_unit_of_work),
    mailer: IMailer = Depends(get_background_mailer),
    config: AdminPanelConfig = Depends(get_config),
):
    """
    Request a password reset mail.

    The response is the same whether or not the email belongs to a backend
    user, so this route cannot be used to discover accounts.
    Mail is sent after the response, so delivery time and failures are
    not observable either.
    """
    use_case = RequestPasswordResetUseCase(uow, mailer, config)
    try:
        result = await use_case.execute(email)
    except IntegrityError:
        # A concurrent request for the same email won the insert
        logger.warning("Concurrent password reset request rejected")
        return redirect_with_flash(request, config.url("/login/reset"), "Error occurred", ERROR)

    if result.is_err():
        raise ServerError(result.error)

    return redirect_with_flash(request, config.url("/login"), result.value.message)


@router.get("/login/reset/{token}")
async def reset_password_token_form(
    request: Request,
    token: str,
    uow: UnitOfWork = Depends(get_unit_of_work),
    renderer: ViewRenderer = Depends(get_renderer),
    config: AdminPanelConfig = Depends(get_config),
):
    """
    New-password form bound to a reset token.

    Raises:
        - 400 Bad Request: Token is unknown, used or expired (same error)
    """
    async with uow:
        validated = await ResetTokenManager(uow, config).validate_token(token)
        if validated.is_err():
            raise ClientError(
                ValidationError("INVALID_TOKEN", "Token is invalid"),
                status_code=status.HTTP_400_BAD_REQUEST,
            )
        expire_at = validated.value.expire_at

    return renderer.render(
        request, "ResetPassword/form", {"token": token, "expire_at": expire_at}
    )


@router.post("/login/reset/{token}")
async def reset_password_token_submit(
    request: Request,
    token: str,
    email: str = Form(""),
    password: str = Form(""),
    password_repeat: str = Form(""),
    uow: UnitOfWork = Depends(get_unit_of_work),
    config: AdminPanelConfig = Depends(get_config),
):
    """
    Consume a reset token and set the new password.

    Token problems send the user back to the reset request form; email and
    password problems back to the token form, where the token still works.
    """
    command = ResetPasswordCommand(
        token=token, email=email, password=password, password_repeat=password_repeat
    )
    use_case = ResetPasswordUseCase(uow, config)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if isinstance(error, ValidationError):
            return redirect_with_flash(
                request, config.url(f"/login/reset/{token}"), error.message, ERROR
            )
        return redirect_with_flash(request, config.url("/login/reset"), error.message, ERROR)

    return redirect_with_flash(request, config.url("/login"), result.value.message, SUCCESS)


def _require_sso(sso_provider: Optional[SSOProvider]) -> SSOProvider:
    if sso_provider is None:
        raise ServerError(ConfigurationError("SSO_NOT_CONFIGURED", "AdminPanel no SSO setup"))
    return sso_provider


@router.get("/login/sso")
async def sso(request: Request, sso_provider: Optional[SSOProvider] = Depends(get_sso_provider)):
    return await _require_sso(sso_provider).auth(request)


@router.get("/login/sso/callback")
async def sso_callback(
    request: Request, sso_provider: Optional[SSOProvider] = Depends(get_sso_provider)
):
    return await _require_sso(sso_provider).callback(request)
