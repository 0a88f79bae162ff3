"""Configuration resolution — CLI > env > defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str) -> bool | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    return raw.strip().lower() in _TRUTHY


@dataclass
class SaveConfig:
    """Options for a single project save.

    Config precedence: explicit dict values > env vars > class defaults.

    Environment variables:
    - WRAPGEN_VERIFY_ROUNDTRIP: re-parse the written model and compare it
    - WRAPGEN_VERBOSITY: console verbosity (0, 1 or 2)
    - WRAPGEN_LOG_DIR: directory for JSONL save logs
    """

    verify_roundtrip: bool = False
    verbosity: int = 0
    log_dir: Path | None = None

    @classmethod
    def from_dict(cls, data: dict | None = None) -> SaveConfig:
        """Create SaveConfig from a dict, applying env var overrides."""
        data = data or {}
        config = cls()

        env_verify = _env_flag("WRAPGEN_VERIFY_ROUNDTRIP")
        if env_verify is not None:
            config.verify_roundtrip = env_verify
        env_verbosity = os.environ.get("WRAPGEN_VERBOSITY")
        if env_verbosity and env_verbosity.strip().isdigit():
            config.verbosity = int(env_verbosity.strip())
        env_log_dir = os.environ.get("WRAPGEN_LOG_DIR")
        if env_log_dir:
            config.log_dir = Path(env_log_dir)

        if data.get("verify_roundtrip") is not None:
            config.verify_roundtrip = bool(data["verify_roundtrip"])
        if data.get("verbosity") is not None:
            config.verbosity = int(data["verbosity"])
        if data.get("log_dir") is not None:
            config.log_dir = Path(data["log_dir"])

        return config
