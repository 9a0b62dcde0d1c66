# config.py ----------------------------------------------------
import os
from dataclasses import dataclass
from typing import Mapping, Optional

import dotenv

from .core import debug

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    trace: bool = False
    trace_limit: int = 50


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Read settings from the environment, after loading ``.env``.

    Variables already present in the environment win over the file.
    """
    dotenv.load_dotenv(env_file or dotenv.find_dotenv(usecwd=True), override=False)
    env = os.environ
    return Settings(
        trace=env.get("PYREACTIVE_TRACE", "").strip().lower() in _TRUTHY,
        trace_limit=_parse_int(env, "PYREACTIVE_TRACE_LIMIT", Settings.trace_limit),
    )


def configure(settings: Optional[Settings] = None) -> Settings:
    if settings is None:
        settings = load_settings()
    debug.set_trace_limit(settings.trace_limit)
    if settings.trace:
        debug.enable_tracing()
    else:
        debug.disable_tracing()
    return settings
