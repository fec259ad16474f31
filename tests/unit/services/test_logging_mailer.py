import logging

import pytest

from admin_panel.adapter.services.logging_mailer import LoggingMailer, redact_email
from admin_panel.config import AdminPanelConfig
from admin_panel.domain.entities import BackendUser


def test_redact_email():
    assert redact_email("jane.doe@example.com") == "ja***@example.com"
    assert redact_email("broken") == "redacted"


def test_reset_link_uses_base_url_and_prefix():
    config = AdminPanelConfig(BASE_URL="https://cms.example.com/", ADMIN_PREFIX="/backend")

    assert LoggingMailer(config).reset_link("abc") == "https://cms.example.com/backend/login/reset/abc"


@pytest.mark.asyncio
async def test_welcome_mail_never_logs_password(config, caplog):
    user = BackendUser(id=1, name="Jane", email="jane@example.com", password_hash="x")

    with caplog.at_level(logging.INFO):
        await LoggingMailer(config).send_welcome_mail(user, "Generated123")

    assert "Generated123" not in caplog.text
    assert "jane@example.com" not in caplog.text
