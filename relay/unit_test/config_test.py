from unittest.mock import Mock

import pytest
from pydantic import ValidationError

from relay import main
from relay.config import Settings, load_settings
from relay.errors import ConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # setenv first so anything load_dotenv writes is undone at teardown
    for name in ("GEMINI_API_KEY", "PORT", "GEMINI_MODEL", "LOG_LEVEL"):
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setattr(main, "configure_logging", Mock())


def test_missing_api_key(monkeypatch):
    with pytest.raises(ConfigError, match="GEMINI_API_KEY"):
        load_settings(env_path=None)

def test_blank_api_key(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "   ")
    with pytest.raises(ConfigError):
        load_settings(env_path=None)

def test_defaults(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    settings = load_settings(env_path=None)
    assert settings.api_key.get_secret_value() == "k"
    assert settings.port == 8080
    assert settings.model_name == "gemini-2.5-flash"
    assert settings.log_level == "INFO"

def test_overrides(monkeypatch):
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-2.0-flash")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    settings = load_settings(env_path=None)
    assert settings.port == 9090
    assert settings.model_name == "gemini-2.0-flash"
    assert settings.log_level == "DEBUG"

@pytest.mark.parametrize("port", ["http", "0", "70000"])
def test_invalid_port(monkeypatch, port):
    monkeypatch.setenv("GEMINI_API_KEY", "k")
    monkeypatch.setenv("PORT", port)
    with pytest.raises(ConfigError, match="Invalid relay configuration"):
        load_settings(env_path=None)

def test_dotenv_file_is_loaded(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("GEMINI_API_KEY=from-file\nPORT=8181\n")
    settings = load_settings(env_path=env_file)
    assert settings.api_key.get_secret_value() == "from-file"
    assert settings.port == 8181

def test_process_env_wins_over_dotenv(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("GEMINI_API_KEY=from-file\n")
    monkeypatch.setenv("GEMINI_API_KEY", "from-env")
    assert load_settings(env_path=env_file).api_key.get_secret_value() == "from-env"

def test_settings_are_frozen():
    settings = Settings(api_key="k")
    with pytest.raises(ValidationError):
        settings.port = 1

def test_api_key_is_not_printed():
    assert "secret-value" not in repr(Settings(api_key="secret-value"))

def test_run_exits_without_api_key(monkeypatch):
    def missing():
        raise ConfigError("GEMINI_API_KEY environment variable is required")

    monkeypatch.setattr(main, "load_settings", missing)
    serve = Mock()
    monkeypatch.setattr(main.uvicorn, "run", serve)

    with pytest.raises(SystemExit) as excinfo:
        main.run()
    assert excinfo.value.code == 1
    serve.assert_not_called()

def test_run_serves_configured_port(monkeypatch):
    calls = {}
    monkeypatch.setattr(main, "load_settings", lambda: Settings(api_key="k", port=9999))
    monkeypatch.setattr(main.uvicorn, "run", lambda app, **kw: calls.update(app=app, **kw))

    main.run()

    assert calls["port"] == 9999
    assert calls["app"].state.settings.port == 9999
