import pytest

from pyreactive import Settings, configure, load_settings
from pyreactive.core import debug


def test_defaults(clean_env):
    settings = load_settings()
    assert settings == Settings(trace=False, trace_limit=50)


def test_reads_environment(clean_env, monkeypatch):
    monkeypatch.setenv("PYREACTIVE_TRACE", "yes")
    monkeypatch.setenv("PYREACTIVE_TRACE_LIMIT", "7")
    assert load_settings() == Settings(trace=True, trace_limit=7)


def test_reads_dotenv_file(clean_env):
    env_file = clean_env / ".env"
    env_file.write_text("PYREACTIVE_TRACE=1\nPYREACTIVE_TRACE_LIMIT=12\n")

    settings = load_settings(str(env_file))

    assert settings.trace is True
    assert settings.trace_limit == 12


def test_environment_wins_over_dotenv(clean_env, monkeypatch):
    env_file = clean_env / ".env"
    env_file.write_text("PYREACTIVE_TRACE_LIMIT=12\n")
    monkeypatch.setenv("PYREACTIVE_TRACE_LIMIT", "3")

    assert load_settings(str(env_file)).trace_limit == 3


def test_invalid_limit(clean_env, monkeypatch):
    monkeypatch.setenv("PYREACTIVE_TRACE_LIMIT", "many")
    with pytest.raises(ValueError, match="PYREACTIVE_TRACE_LIMIT"):
        load_settings()


def test_configure_applies_settings(clean_env):
    configure(Settings(trace=True, trace_limit=5))
    assert debug.is_tracing_enabled()

    configure(Settings(trace=False))
    assert not debug.is_tracing_enabled()


def test_configure_loads_from_environment(clean_env, monkeypatch):
    monkeypatch.setenv("PYREACTIVE_TRACE", "on")
    settings = configure()
    assert settings.trace is True
    assert debug.is_tracing_enabled()
