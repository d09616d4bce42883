"""
Configuration tests - environment parsing and validation.
"""

import pytest
import os
import importlib

from src.core import config


@pytest.fixture
def env(request):
    """Apply environment overrides, reload config, restore afterwards."""
    original_env = os.environ.copy()
    os.environ.update(request.param)
    importlib.reload(config)

    yield

    os.environ.clear()
    os.environ.update(original_env)
    importlib.reload(config)


class TestConfigDefaults:

    def test_defaults(self):
        assert config.CURRENCY == os.getenv("CURRENCY", "KSh")
        assert config.EGGS_PER_TRAY == int(os.getenv("EGGS_PER_TRAY", "30"))
        assert config.VERSION

    @pytest.mark.parametrize("env", [{"DEBUG": "false"}], indirect=True)
    def test_debug_disabled(self, env):
        assert config.DEBUG is False
        assert config.debug_enabled() is False

    @pytest.mark.parametrize("env", [{"ADMIN_UI_TYPE": "web"}], indirect=True)
    def test_ui_type(self, env):
        assert config.get_ui_type() == "web"
        assert config.validate_admin_config() == []


class TestConfigValidation:

    @pytest.mark.parametrize("env", [{"ADMIN_UI_TYPE": "desktop"}], indirect=True)
    def test_invalid_ui_type(self, env):
        issues = config.validate_admin_config()
        assert len(issues) == 1
        assert "Invalid ADMIN_UI_TYPE" in issues[0]

    @pytest.mark.parametrize("env", [{"EGGS_PER_TRAY": "0", "LOG_LEVEL": "chatty"}], indirect=True)
    def test_multiple_issues_reported(self, env):
        issues = config.validate_admin_config()
        assert "EGGS_PER_TRAY must be >= 1" in issues
        assert "Invalid LOG_LEVEL: CHATTY" in issues

    @pytest.mark.parametrize("env", [{"CURRENCY": "  "}], indirect=True)
    def test_blank_currency(self, env):
        assert config.validate_admin_config() == ["CURRENCY must not be empty"]
