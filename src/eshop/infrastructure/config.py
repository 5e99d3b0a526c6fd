"""Runtime settings, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

# The repo root when installed in editable mode.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LEVEL_BY_ENVIRONMENT = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class Settings:
    """
    ESHOP_DATA_DIR      directory holding the JSON documents
    ESHOP_VERIFY_TOTAL  reject orders whose declared total differs from
                        the sum of their items (default true)
    ENVIRONMENT         development | test | staging | production
    LOG_LEVEL           overrides the environment's default level
    """

    data_dir: Path = _DEFAULT_DATA_DIR
    verify_total: bool = True
    environment: str = "development"
    log_level: str = "DEBUG"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ
        environment = env.get("ENVIRONMENT", "development").lower()
        return Settings(
            data_dir=Path(env["ESHOP_DATA_DIR"]) if env.get("ESHOP_DATA_DIR") else _DEFAULT_DATA_DIR,
            verify_total=env.get("ESHOP_VERIFY_TOTAL", "true").strip().lower() not in _FALSE_VALUES,
            environment=environment,
            log_level=env.get("LOG_LEVEL", _LEVEL_BY_ENVIRONMENT.get(environment, "INFO")).upper(),
        )
