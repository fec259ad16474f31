from admin_panel.app.errors import NotFoundError
from admin_panel.app.services.gate import Gate
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.domain.entities import BackendUserView
from admin_panel.libs.result import Result, Return
from .dtos import BackendUserResponse
from .permissions import require_manage


class GetBackendUserUseCase:
    """Load one backend user for the edit form"""

    def __init__(self, uow: UnitOfWork, gate: Gate):
        self.uow = uow
        self.gate = gate

    async def execute(self, actor: BackendUserView, user_id: int) -> Result[BackendUserResponse]:
        async with self.uow:
            user = await self.uow.backend_users.get_by_id(user_id)
            if user is None:
                return Return.err(NotFoundError(message="User was not found"))

            allowed = require_manage(self.gate, actor, user)
            if allowed.is_err():
                return Return.err(allowed.error)

            return Return.ok(BackendUserResponse.model_validate(user, from_attributes=True))
