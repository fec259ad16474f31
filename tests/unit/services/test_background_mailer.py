import logging
from unittest.mock import AsyncMock

import pytest
from fastapi import BackgroundTasks

from admin_panel.api.background_mailer import BackgroundMailer
from admin_panel.domain.entities import BackendUser


@pytest.fixture
def user():
    return BackendUser(id=7, name="Jane", email="jane@example.com", password_hash="x")


@pytest.mark.asyncio
async def test_mail_is_sent_only_when_tasks_run(mock_mailer, user):
    tasks = BackgroundTasks()
    mailer = BackgroundMailer(mock_mailer, tasks)

    await mailer.send_reset_password_mail(user, "T" * 64)
    mock_mailer.send_reset_password_mail.assert_not_awaited()

    await tasks()
    mock_mailer.send_reset_password_mail.assert_awaited_once_with(user, "T" * 64)


@pytest.mark.asyncio
async def test_delivery_failure_is_logged_not_raised(mock_mailer, user, caplog):
    mock_mailer.send_welcome_mail = AsyncMock(side_effect=ConnectionError("down"))
    tasks = BackgroundTasks()

    await BackgroundMailer(mock_mailer, tasks).send_welcome_mail(user, "Generated123")
    with caplog.at_level(logging.ERROR):
        await tasks()

    assert "Failed to send welcome mail to backend user 7" in caplog.text
    assert "Generated123" not in caplog.text
