"""Tests for configuration loading."""

import os

import pytest

from gridbf.config import InterpreterConfig, load_config


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Isolated environment and an empty .env file."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("GRIDBF_")}
    monkeypatch.setattr(os, "environ", env)
    env_file = tmp_path / ".env"
    env_file.write_text("")
    return env_file


def test_defaults():
    config = InterpreterConfig()
    assert config.io_char is True
    assert config.debug_mode is False
    assert config.input_poll_interval == 0.05
    assert config.log_level == "WARNING"


def test_validation():
    with pytest.raises(ValueError):
        InterpreterConfig(input_poll_interval=0)
    with pytest.raises(ValueError):
        InterpreterConfig(log_level="LOUD")
    assert InterpreterConfig(log_level="debug").log_level == "DEBUG"


def test_load_config_from_environment(clean_env):
    os.environ["GRIDBF_IO_CHAR"] = "0"
    os.environ["GRIDBF_DEBUG"] = "yes"
    os.environ["GRIDBF_LOG_LEVEL"] = "info"

    config = load_config(str(clean_env))

    assert config.io_char is False
    assert config.debug_mode is True
    assert config.log_level == "INFO"


def test_load_config_from_env_file(clean_env):
    clean_env.write_text("GRIDBF_POLL_INTERVAL=0.2\nGRIDBF_COLOR=off\n")

    config = load_config(str(clean_env))

    assert config.input_poll_interval == 0.2
    assert config.color is False
    assert config.io_char is True


def test_environment_wins_over_env_file(clean_env):
    clean_env.write_text("GRIDBF_DEBUG=1\n")
    os.environ["GRIDBF_DEBUG"] = "0"
    assert load_config(str(clean_env)).debug_mode is False


@pytest.mark.parametrize("key,value", [
    ("GRIDBF_IO_CHAR", "maybe"),
    ("GRIDBF_POLL_INTERVAL", "soon"),
    ("GRIDBF_POLL_INTERVAL", "-1"),
])
def test_bad_values_raise(clean_env, key, value):
    os.environ[key] = value
    with pytest.raises(ValueError):
        load_config(str(clean_env))
