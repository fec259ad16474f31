from admin_panel.config import AdminPanelConfig, load_config


def test_defaults_when_file_missing(tmp_path):
    config = load_config(str(tmp_path / "missing.yaml"))

    assert config.ADMIN_PREFIX == "/admin"
    assert config.RESET_TOKEN_TTL_MINUTES == 60
    assert config.is_local is False


def test_load_from_yaml(tmp_path):
    path = tmp_path / "env.yaml"
    path.write_text(
        "ENVIRONMENT: local\n"
        "AUTO_LOGIN_FIRST_USER: true\n"
        "ADMIN_PREFIX: /backend\n"
        "ROLES: [viewer, admin]\n"
    )

    config = load_config(str(path))

    assert config.is_local is True
    assert config.AUTO_LOGIN_FIRST_USER is True
    assert config.ROLES == ["viewer", "admin"]
    assert config.url("/login") == "/backend/login"


def test_url_with_trailing_slash_prefix():
    assert AdminPanelConfig(ADMIN_PREFIX="/admin/").url("/dashboard") == "/admin/dashboard"
