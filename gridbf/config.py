#!/usr/bin/env python3
"""
Interpreter configuration.

The machine geometry (tape length, cell modulus, step ceiling) is fixed.
Everything else is a user preference that can come from the environment
or from a local .env file:

    GRIDBF_IO_CHAR=1          # character I/O (0 for numeric)
    GRIDBF_DEBUG=0            # per-step debug records
    GRIDBF_POLL_INTERVAL=0.05 # seconds between abort checks while waiting for input
    GRIDBF_COLOR=1            # ANSI colours on the console
    GRIDBF_LOG_LEVEL=WARNING
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

TAPE_LENGTH = 30
NUM_VALUES = 256
MAX_STEPS = 1000

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


@dataclass
class InterpreterConfig:
    """Runtime preferences for an interpreter session."""
    io_char: bool = True
    debug_mode: bool = False
    input_poll_interval: float = 0.05
    color: bool = True
    log_level: str = "WARNING"

    def __post_init__(self):
        """Validate configuration."""
        if self.input_poll_interval <= 0:
            raise ValueError("input_poll_interval must be positive")
        self.log_level = self.log_level.upper()
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"unknown log level: {self.log_level}")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def load_config(env_file: Optional[str] = None) -> InterpreterConfig:
    """Build a config from the environment, reading a .env file first if present."""
    load_dotenv(dotenv_path=env_file)
    defaults = InterpreterConfig()
    try:
        poll = float(os.environ.get("GRIDBF_POLL_INTERVAL", defaults.input_poll_interval))
    except ValueError:
        raise ValueError("GRIDBF_POLL_INTERVAL must be a number")
    return InterpreterConfig(
        io_char=_env_bool("GRIDBF_IO_CHAR", defaults.io_char),
        debug_mode=_env_bool("GRIDBF_DEBUG", defaults.debug_mode),
        input_poll_interval=poll,
        color=_env_bool("GRIDBF_COLOR", defaults.color),
        log_level=os.environ.get("GRIDBF_LOG_LEVEL", defaults.log_level),
    )


DEFAULT_CONFIG = InterpreterConfig()
