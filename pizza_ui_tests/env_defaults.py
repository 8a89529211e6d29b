"""Read suite defaults from the repository's .env.defaults file.

Lookup order used by the config layer is: process environment, then
.env.defaults, then the fallback given by the caller.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Dict

ENV_DEFAULTS_FILE = Path(__file__).resolve().parents[1] / ".env.defaults"


@lru_cache(maxsize=1)
def _load_env_defaults() -> Dict[str, str]:
    if not ENV_DEFAULTS_FILE.exists():
        return {}

    defaults: Dict[str, str] = {}
    for raw in ENV_DEFAULTS_FILE.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] in ('"', "'") and value[-1] == value[0]:
            value = value[1:-1]
        defaults[key.strip()] = value
    return defaults


def get_env_default(key: str) -> str | None:
    return _load_env_defaults().get(key)


def get_setting(key: str, fallback: str | None = None) -> str | None:
    """Return ``key`` from the environment, then .env.defaults, then ``fallback``."""
    value = os.getenv(key)
    if value:
        return value
    default = get_env_default(key)
    if default:
        return default
    return fallback
