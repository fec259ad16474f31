from typing import Dict

from admin_panel.config import AdminPanelConfig


class Gate:
    """
    Role checks against the configured role ladder.

    A user passes for a role when their own role sits at the same rung
    or higher. Unknown roles rank below every configured one.
    """

    def __init__(self, config: AdminPanelConfig):
        self.roles = list(config.ROLES)

    def rank(self, role: str) -> int:
        try:
            return self.roles.index(role)
        except ValueError:
            return -1

    def allow(self, user_role: str, role: str) -> bool:
        if self.rank(role) < 0:
            return False
        return self.rank(user_role) >= self.rank(role)

    def role_options(self, user_role: str) -> Dict[str, str]:
        """Roles a user may hand out: their own and everything below"""
        return {
            role: role.replace("-", " ").title()
            for role in self.roles
            if self.allow(user_role, role)
        }
