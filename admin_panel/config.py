import os
from typing import List, Optional

import yaml
from pydantic import BaseModel, ConfigDict

ROOT_PATH = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")


class AdminPanelConfig(BaseModel):
    """
    Admin panel settings.

    Built once at composition time and handed to create_app, the guard
    and the token manager. Nothing reads configuration from module state.
    """

    model_config = ConfigDict(frozen=True)

    DB_URI: str = "sqlite+aiosqlite:///./admin_panel.db"
    API_PORT: int = 8000
    API_HOST: str = "0.0.0.0"
    CORS_ORIGINS: List[str] = []
    CORS_ALLOW_CREDENTIALS: bool = True
    LOG_LEVEL: str = "INFO"

    # "local" enables development conveniences such as auto-login
    ENVIRONMENT: str = "production"
    AUTO_LOGIN_FIRST_USER: bool = False

    ADMIN_PREFIX: str = "/admin"
    BASE_URL: str = "http://localhost:8000"

    SESSION_SECRET: str = "dev-session-secret-change-in-production"
    SESSION_COOKIE_NAME: str = "admin_panel_session"
    SESSION_MAX_AGE_SECONDS: int = 14 * 24 * 60 * 60
    SESSION_COOKIE_SECURE: bool = False

    RESET_TOKEN_TTL_MINUTES: int = 60
    PASSWORD_MIN_LENGTH: int = 8

    # Ordered from least to most privileged
    ROLES: List[str] = ["user", "admin", "super-admin"]
    DEFAULT_ROLE: str = "user"

    @property
    def is_local(self) -> bool:
        return self.ENVIRONMENT == "local"

    def url(self, path: str = "") -> str:
        """Absolute admin path for a path relative to the admin prefix"""
        return self.ADMIN_PREFIX.rstrip("/") + path


def load_config(path: Optional[str] = None) -> AdminPanelConfig:
    path = path or CONFIG_FILE_PATH
    if os.path.exists(path):
        with open(path, "r") as r_file:
            data = yaml.safe_load(r_file) or dict()
    else:
        data = dict()
    return AdminPanelConfig(**data)
