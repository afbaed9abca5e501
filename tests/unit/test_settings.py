"""Unit tests for the settings module.

``SECRET_KEY`` has no default: a process started without it must fail
while importing the settings.
"""

import importlib.util

import pytest
from decouple import UndefinedValueError

pytestmark = pytest.mark.unit


def _load_settings_module():
    spec = importlib.util.find_spec("config.settings")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


class TestSecretKey:
    def test_read_from_environment(self, monkeypatch):
        monkeypatch.setenv("SECRET_KEY", "from-the-environment")
        assert _load_settings_module().SECRET_KEY == "from-the-environment"

    def test_missing_key_fails_fast(self, monkeypatch):
        monkeypatch.delenv("SECRET_KEY", raising=False)
        with pytest.raises(UndefinedValueError):
            _load_settings_module()
