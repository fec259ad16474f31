from typing import Optional

from fastapi import BackgroundTasks, Depends, Request
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlmodel.ext.asyncio.session import AsyncSession

from admin_panel.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from admin_panel.api.background_mailer import BackgroundMailer
from admin_panel.api.error import RedirectError
from admin_panel.api.flash import get_session
from admin_panel.api.views import ViewRenderer
from admin_panel.app.services.auth_guard import RequestAuthenticationGuard
from admin_panel.app.services.gate import Gate
from admin_panel.app.services.mailer import IMailer
from admin_panel.app.services.session import SessionAuthenticator
from admin_panel.app.services.sso import SSOProvider
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.config import AdminPanelConfig
from admin_panel.domain.entities import BackendUserView


def create_session_factory(config: AdminPanelConfig) -> async_sessionmaker:
    engine = create_async_engine(config.DB_URI, echo=False, future=True)
    return async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
    )


def get_config(request: Request) -> AdminPanelConfig:
    return request.app.state.config


def get_mailer(request: Request) -> IMailer:
    return request.app.state.mailer


def get_background_mailer(
    background_tasks: BackgroundTasks, mailer: IMailer = Depends(get_mailer)
) -> IMailer:
    """Mailer for request handlers: delivery is deferred until after the response"""
    return BackgroundMailer(mailer, background_tasks)


def get_renderer(request: Request) -> ViewRenderer:
    return request.app.state.renderer


def get_sso_provider(request: Request) -> Optional[SSOProvider]:
    return request.app.state.sso_provider


def get_gate(config: AdminPanelConfig = Depends(get_config)) -> Gate:
    return Gate(config)


async def get_unit_of_work(request: Request):
    async with request.app.state.session_factory() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_authenticator(uow: UnitOfWork = Depends(get_unit_of_work)) -> SessionAuthenticator:
    return SessionAuthenticator(uow)


async def require_backend_user(
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    authenticator: SessionAuthenticator = Depends(get_authenticator),
    config: AdminPanelConfig = Depends(get_config),
) -> BackendUserView:
    """
    Guard for protected routes.

    Attaches the authenticated user to request.state.backend_user, or
    raises RedirectError to short-circuit the request.

    Raises:
        RedirectError: to the login page or the forced password change form
    """
    guard = RequestAuthenticationGuard(uow, authenticator, config)
    outcome = await guard.check(request.url.path, get_session(request))

    if outcome.is_err():
        redirect = outcome.error
        raise RedirectError(redirect.location, redirect.message, redirect.kind)

    request.state.backend_user = outcome.value
    return outcome.value
