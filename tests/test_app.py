# tests/test_app.py
import pytest

from futurehire.core.config import Settings
from futurehire.core.errors import ConfigurationError
from futurehire.main import create_app
from futurehire.repositories.users import InMemoryCredentialStore, build_store


def test_app_refuses_to_start_without_secret():
    with pytest.raises(ConfigurationError):
        create_app(Settings(SECRET_KEY="", STORE_BACKEND="memory"))

def test_unknown_store_backend():
    with pytest.raises(ConfigurationError):
        build_store(Settings(SECRET_KEY="s", STORE_BACKEND="sqlite"))

def test_memory_backend_selection():
    assert isinstance(build_store(Settings(SECRET_KEY="s", STORE_BACKEND="memory")), InMemoryCredentialStore)

def test_settings_lists():
    s = Settings(SECRET_KEY="s", ALLOWED_HOSTS="http://a.test, http://b.test", RESUME_ALLOWED_EXTENSIONS=".PDF,.txt")
    assert s.cors_origins == ["http://a.test", "http://b.test"]
    assert s.resume_extensions == (".pdf", ".txt")
