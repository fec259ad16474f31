"""
Update Backend User Use Case
"""

import logging

from admin_panel.app.errors import NotFoundError, ValidationError
from admin_panel.app.services.gate import Gate
from admin_panel.app.services.passwords import hash_password, validate_new_password
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.config import AdminPanelConfig
from admin_panel.domain.base import utcnow
from admin_panel.domain.entities import BackendUserView
from admin_panel.libs.result import Result, Return
from .dtos import BackendUserForm, BackendUserResponse
from .permissions import require_manage

logger = logging.getLogger(__name__)


class UpdateBackendUserUseCase:
    """
    Use case for updating a backend user.

    Business Rules:
    - Users may always update themselves; others need admin plus the
      target's role
    - Blank password keeps the current one
    - A new password clears should_reset_password
    - should_reset_password from the form only applies when editing
      someone else, so a flagged user cannot clear it without a new password
    - Role changes are limited to roles the acting user may hand out
    """

    def __init__(self, uow: UnitOfWork, gate: Gate, config: AdminPanelConfig):
        self.uow = uow
        self.gate = gate
        self.config = config

    async def execute(
        self, actor: BackendUserView, user_id: int, form: BackendUserForm
    ) -> Result[BackendUserResponse]:
        async with self.uow:
            user = await self.uow.backend_users.get_by_id(user_id)
            if user is None:
                return Return.err(NotFoundError(message="User was not found"))

            allowed = require_manage(self.gate, actor, user)
            if allowed.is_err():
                return Return.err(allowed.error)

            fields = {}

            if form.role and form.role != user.role:
                if form.role not in self.gate.role_options(actor.role):
                    fields["role"] = ["Invalid role"]

            if form.email != user.email:
                existing = await self.uow.backend_users.get_by_email(form.email)
                if existing is not None:
                    fields["email"] = ["E-mail is already in use"]

            if form.password:
                password_check = validate_new_password(
                    form.password, form.password_repeat, self.config.PASSWORD_MIN_LENGTH
                )
                if password_check.is_err():
                    fields["password"] = [password_check.error.message]

            if fields:
                return Return.err(ValidationError(message="Validation error", fields=fields))

            user.name = form.name
            user.email = form.email
            if form.role:
                user.role = form.role
            if user.id != actor.id:
                user.should_reset_password = form.should_reset_password
            if form.password:
                user.password_hash = hash_password(form.password)
                user.should_reset_password = False
            user.updated_at = utcnow()

            user = await self.uow.backend_users.update(user)
            await self.uow.commit()

            logger.info(f"Backend user {user.id} updated by {actor.id}")

            return Return.ok(BackendUserResponse.model_validate(user, from_attributes=True))
