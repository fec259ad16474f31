"""
Create Backend User Use Case
"""

import logging

from admin_panel.app.errors import ValidationError
from admin_panel.app.services.gate import Gate
from admin_panel.app.services.mailer import IMailer
from admin_panel.app.services.passwords import (
    hash_password,
    random_alphanumeric,
    validate_new_password,
)
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.config import AdminPanelConfig
from admin_panel.domain.entities import BackendUser, BackendUserView
from admin_panel.libs.result import Result, Return
from .dtos import BackendUserForm, BackendUserResponse
from .permissions import require_admin

logger = logging.getLogger(__name__)

RANDOM_PASSWORD_LENGTH = 12


class CreateBackendUserUseCase:
    """
    Use case for creating a backend user.

    Business Rules:
    - Only admins create users
    - Role must be one the acting user may hand out; defaults to DEFAULT_ROLE
    - Email must be unique
    - Blank password or random_password generates a 12 character password
      and forces a password reset on first login
    - With send_mail the welcome mail carries the generated password only
    """

    def __init__(
        self, uow: UnitOfWork, mailer: IMailer, gate: Gate, config: AdminPanelConfig
    ):
        self.uow = uow
        self.mailer = mailer
        self.gate = gate
        self.config = config

    async def execute(
        self, actor: BackendUserView, form: BackendUserForm
    ) -> Result[BackendUserResponse]:
        allowed = require_admin(self.gate, actor)
        if allowed.is_err():
            return Return.err(allowed.error)

        role = form.role or self.config.DEFAULT_ROLE
        if role not in self.gate.role_options(actor.role):
            return Return.err(
                ValidationError(message="Validation error", fields={"role": ["Invalid role"]})
            )

        random_password = form.random_password or not form.password
        if random_password:
            password = random_alphanumeric(RANDOM_PASSWORD_LENGTH)
        else:
            password = form.password
            password_check = validate_new_password(
                form.password, form.password_repeat, self.config.PASSWORD_MIN_LENGTH
            )
            if password_check.is_err():
                return Return.err(
                    ValidationError(
                        message="Validation error",
                        fields={"password": [password_check.error.message]},
                    )
                )

        async with self.uow:
            if await self.uow.backend_users.get_by_email(form.email) is not None:
                return Return.err(
                    ValidationError(
                        message="Validation error",
                        fields={"email": ["E-mail is already in use"]},
                    )
                )

            user = BackendUser(
                name=form.name,
                email=form.email,
                password_hash=hash_password(password),
                role=role,
                should_reset_password=random_password or form.should_reset_password,
            )
            user = await self.uow.backend_users.create(user)
            await self.uow.commit()

        logger.info(f"Backend user {user.id} created by {actor.id}")

        if form.send_mail:
            await self.mailer.send_welcome_mail(user, password if random_password else None)

        return Return.ok(BackendUserResponse.model_validate(user, from_attributes=True))
