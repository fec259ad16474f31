from typing import Optional

from admin_panel.app.services.gate import Gate
from admin_panel.app.services.unit_of_work import UnitOfWork
from admin_panel.domain.entities import BackendUserView
from admin_panel.libs.result import Result, Return
from .dtos import BackendUserListResponse, BackendUserResponse
from .permissions import require_admin


class ListBackendUsersUseCase:
    """List backend users for admins, optionally filtered by exact name"""

    def __init__(self, uow: UnitOfWork, gate: Gate):
        self.uow = uow
        self.gate = gate

    async def execute(
        self, actor: BackendUserView, search: Optional[str] = None
    ) -> Result[BackendUserListResponse]:
        allowed = require_admin(self.gate, actor)
        if allowed.is_err():
            return Return.err(allowed.error)

        async with self.uow:
            users = await self.uow.backend_users.list(name=search)
            return Return.ok(
                BackendUserListResponse(
                    users=[
                        BackendUserResponse.model_validate(user, from_attributes=True)
                        for user in users
                    ]
                )
            )
