"""Runtime settings read from the environment and an optional ``.env`` file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

ENV_PREFIX = "NAME_CLASSIFIER_"


@dataclass
class Settings:
    """Defaults for a pipeline run. CLI options take precedence."""

    data_path: str = "names.csv"
    seed: Optional[int] = None
    train_ratio: float = 0.8
    workers: int = 1
    log_level: str = "WARNING"


def _env(name: str) -> Optional[str]:
    value = os.getenv(ENV_PREFIX + name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _parse(name: str, value: str, convert):
    try:
        return convert(value)
    except ValueError:
        raise ValueError(f"Invalid value for {ENV_PREFIX}{name}: {value!r}") from None


def load_settings(dotenv_path: Optional[str] = None) -> Settings:
    """Build settings from ``NAME_CLASSIFIER_*`` environment variables.

    Variables already set in the environment win over the ``.env`` file.

    Raises:
        ValueError: If a numeric variable cannot be parsed.
    """
    load_dotenv(dotenv_path)
    settings = Settings()

    data_path = _env("DATA")
    if data_path is not None:
        settings.data_path = data_path

    seed = _env("SEED")
    if seed is not None:
        settings.seed = _parse("SEED", seed, int)

    train_ratio = _env("TRAIN_RATIO")
    if train_ratio is not None:
        settings.train_ratio = _parse("TRAIN_RATIO", train_ratio, float)

    workers = _env("WORKERS")
    if workers is not None:
        settings.workers = _parse("WORKERS", workers, int)

    log_level = _env("LOG_LEVEL")
    if log_level is not None:
        settings.log_level = log_level.upper()

    return settings
