"""
Unit tests for RequestAuthenticationGuard
"""
import pytest

from admin_panel.app.errors import GuardRedirect
from admin_panel.app.services.auth_guard import RequestAuthenticationGuard
from admin_panel.app.services.session import USER_KEY, SessionAuthenticator, SessionData
from admin_panel.config import AdminPanelConfig
from admin_panel.domain.entities import BackendUser, BackendUserView


def make_user(user_id=7, should_reset_password=False, role="user") -> BackendUser:
    return BackendUser(
        id=user_id,
        name="Jane",
        email="jane@example.com",
        password_hash="x",
        role=role,
        should_reset_password=should_reset_password,
    )


def make_guard(uow, config) -> RequestAuthenticationGuard:
    return RequestAuthenticationGuard(uow, SessionAuthenticator(uow), config)


@pytest.mark.asyncio
async def test_authenticated_user_passes(mock_uow, config):
    mock_uow.backend_users.get_by_id.return_value = make_user()
    session = SessionData({USER_KEY: 7})

    result = await make_guard(mock_uow, config).check("/admin/dashboard", session)

    assert result.is_ok()
    assert isinstance(result.value, BackendUserView)
    assert result.value.id == 7
    mock_uow.backend_users.get_by_id.assert_called_once_with(7)


@pytest.mark.asyncio
async def test_unauthenticated_redirects_to_login_with_next(mock_uow, config):
    result = await make_guard(mock_uow, config).check("/admin/backend_users", SessionData())

    assert result.is_err()
    assert isinstance(result.error, GuardRedirect)
    assert result.error.location == "/admin/login?next=/admin/backend_users"
    assert result.error.message == "Session expired login again"
    assert result.error.kind == "error"


@pytest.mark.asyncio
async def test_deleted_user_session_is_cleared(mock_uow, config):
    session = SessionData({USER_KEY: 99})

    result = await make_guard(mock_uow, config).check("/admin/dashboard", session)

    assert result.is_err()
    assert USER_KEY not in session


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/admin/dashboard", "/admin/backend_users", "/admin/backend_users/edit/8"])
async def test_flagged_user_forced_to_own_edit_form(mock_uow, config, path):
    mock_uow.backend_users.get_by_id.return_value = make_user(should_reset_password=True)
    session = SessionData({USER_KEY: 7})

    result = await make_guard(mock_uow, config).check(path, session)

    assert result.is_err()
    assert result.error.location == "/admin/backend_users/edit/7"
    assert result.error.message == "Please change your password"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/admin/backend_users/edit/7", "/admin/backend_users/update"])
async def test_flagged_user_reaches_password_change_routes(mock_uow, config, path):
    mock_uow.backend_users.get_by_id.return_value = make_user(should_reset_password=True)
    session = SessionData({USER_KEY: 7})

    result = await make_guard(mock_uow, config).check(path, session)

    assert result.is_ok()
    assert result.value.should_reset_password is True


@pytest.mark.asyncio
async def test_auto_login_first_user_in_local_environment(mock_uow):
    config = AdminPanelConfig(ENVIRONMENT="local", AUTO_LOGIN_FIRST_USER=True)
    mock_uow.backend_users.first.return_value = make_user(user_id=1)
    session = SessionData()

    result = await make_guard(mock_uow, config).check("/admin/dashboard", session)

    assert result.is_ok()
    assert result.value.id == 1
    assert session.get(USER_KEY) == 1
    assert session.modified is True


@pytest.mark.asyncio
async def test_auto_login_without_any_user_redirects(mock_uow):
    config = AdminPanelConfig(ENVIRONMENT="local", AUTO_LOGIN_FIRST_USER=True)

    result = await make_guard(mock_uow, config).check("/admin/dashboard", SessionData())

    assert result.is_err()
    assert result.error.location.startswith("/admin/login")


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "settings",
    [
        {"ENVIRONMENT": "production", "AUTO_LOGIN_FIRST_USER": True},
        {"ENVIRONMENT": "local", "AUTO_LOGIN_FIRST_USER": False},
    ],
)
async def test_auto_login_disabled(mock_uow, settings):
    config = AdminPanelConfig(**settings)
    mock_uow.backend_users.first.return_value = make_user(user_id=1)

    result = await make_guard(mock_uow, config).check("/admin/dashboard", SessionData())

    assert result.is_err()
    mock_uow.backend_users.first.assert_not_called()


def test_login_path_quotes_next(mock_uow, config):
    guard = make_guard(mock_uow, config)

    assert guard.login_path("/admin/backend_users?search=a b") == (
        "/admin/login?next=/admin/backend_users%3Fsearch%3Da%20b"
    )
