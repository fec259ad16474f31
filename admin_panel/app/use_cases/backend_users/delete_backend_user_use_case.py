import logging

from admin_panel.app.errors import NotFoundError
from admin_panel.app.services.gate import Gate
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.domain.entities import BackendUserView
from admin_panel.libs.result import Result, Return
from .permissions import require_admin, require_manage

logger = logging.getLogger(__name__)


class DeleteBackendUserUseCase:
    """Delete a backend user. Requires admin and at least the target's role."""

    def __init__(self, uow: UnitOfWork, gate: Gate):
        self.uow = uow
        self.gate = gate

    async def execute(self, actor: BackendUserView, user_id: int) -> Result[None]:
        allowed = require_admin(self.gate, actor)
        if allowed.is_err():
            return Return.err(allowed.error)

        async with self.uow:
            user = await self.uow.backend_users.get_by_id(user_id)
            if user is None:
                return Return.err(NotFoundError(message="User was not found"))

            allowed = require_manage(self.gate, actor, user)
            if allowed.is_err():
                return Return.err(allowed.error)

            await self.uow.backend_users.delete(user)
            await self.uow.commit()

        logger.info(f"Backend user {user_id} deleted by {actor.id}")
        return Return.ok(None)
