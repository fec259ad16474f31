import pytest
from unittest.mock import AsyncMock, MagicMock

from admin_panel.config import AdminPanelConfig


@pytest.fixture
def config():
    return AdminPanelConfig(SESSION_SECRET="unit-test-secret")


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with both repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.backend_users = MagicMock()
    uow.backend_users.get_by_email = AsyncMock(return_value=None)
    uow.backend_users.get_by_id = AsyncMock(return_value=None)
    uow.backend_users.first = AsyncMock(return_value=None)
    uow.backend_users.list = AsyncMock(return_value=[])
    uow.backend_users.create = AsyncMock(side_effect=lambda user: user)
    uow.backend_users.update = AsyncMock(side_effect=lambda user: user)
    uow.backend_users.delete = AsyncMock()

    uow.reset_password_tokens = MagicMock()
    uow.reset_password_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.reset_password_tokens.get_by_token_hash = AsyncMock(return_value=None)
    uow.reset_password_tokens.delete_by_email = AsyncMock(return_value=0)
    uow.reset_password_tokens.update = AsyncMock(side_effect=lambda token: token)

    return uow


@pytest.fixture
def mock_mailer():
    mailer = MagicMock()
    mailer.send_welcome_mail = AsyncMock()
    mailer.send_reset_password_mail = AsyncMock()
    return mailer
