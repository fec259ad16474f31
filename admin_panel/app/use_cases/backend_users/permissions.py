from admin_panel.app.errors import ForbiddenError
from admin_panel.app.services.gate import Gate
from admin_panel.domain.entities import BackendUser, BackendUserView
from admin_panel.libs.result import Result, Return

ADMIN_ROLE = "admin"


def require_admin(gate: Gate, actor: BackendUserView) -> Result[None]:
    if not gate.allow(actor.role, ADMIN_ROLE):
        return Return.err(ForbiddenError(message="Admin role required"))
    return Return.ok(None)


def require_manage(gate: Gate, actor: BackendUserView, target: BackendUser) -> Result[None]:
    """Anyone may manage themselves; others need admin and at least the target's role"""
    if target.id == actor.id:
        return Return.ok(None)

    admin_check = require_admin(gate, actor)
    if admin_check.is_err():
        return admin_check

    if not gate.allow(actor.role, target.role):
        return Return.err(ForbiddenError(message=f"Role {target.role} required"))

    return Return.ok(None)
