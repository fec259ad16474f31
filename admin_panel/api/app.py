import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from admin_panel.adapter.services.logging_mailer import LoggingMailer
from admin_panel.app.services.mailer import IMailer
from admin_panel.app.services.sso import SSOProvider
from admin_panel.config import AdminPanelConfig
from .error import ClientError, RedirectError, ServerError
from .flash import redirect_with_flash
from .middleware.session import SessionCookieMiddleware
from .views import JSONViewRenderer, ViewRenderer

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    error_dict = {"code": exc.base_error.code, "message": exc.base_error.message}
    logger.warning(f"Client error: {error_dict}")
    return JSONResponse(status_code=exc.status_code, content={"error": error_dict})


async def handle_server_error(request: Request, exc: ServerError):
    error_dict = {"code": exc.base_error.code, "message": "Internal server error"}
    logger.error(f"Server error: {exc.base_error.code}: {exc.base_error.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": error_dict}
    )


async def handle_redirect(request: Request, exc: RedirectError):
    return redirect_with_flash(request, exc.location, exc.message, exc.kind)


def create_app(
    config: AdminPanelConfig,
    mailer: Optional[IMailer] = None,
    renderer: Optional[ViewRenderer] = None,
    sso_provider: Optional[SSOProvider] = None,
) -> FastAPI:
    from admin_panel.depends import create_session_factory

    app = FastAPI(title="Admin Panel", version="0.1.0")

    app.state.config = config
    app.state.session_factory = create_session_factory(config)
    app.state.mailer = mailer or LoggingMailer(config)
    app.state.renderer = renderer or JSONViewRenderer()
    app.state.sso_provider = sso_provider

    app.add_middleware(SessionCookieMiddleware, config=config)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=config.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from admin_panel.api.routes import backend_users, login

    app.include_router(login.router, prefix=config.ADMIN_PREFIX, tags=["Login"])
    app.include_router(backend_users.router, prefix=config.ADMIN_PREFIX, tags=["Backend Users"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(RedirectError, handle_redirect)

    return app
