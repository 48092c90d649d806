"""Runtime settings read from the environment (and an optional .env file)."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .classifier import parse_optimization_types
from .schemas import OptimizationType

logger = logging.getLogger(__name__)


ENV_PREFIX = "PATTERN_OPTIMIZER_"

OUTPUT_FORMATS = ("text", "json", "markdown", "rich")


@dataclass
class Settings:
    """Defaults for analyses and the CLI."""

    seed: int | None = None
    optimization_types: list[OptimizationType] = field(
        default_factory=lambda: list(OptimizationType)
    )
    output_format: str = "rich"
    log_level: str = "WARNING"
    domains_file: Path | None = None


def _env(name: str) -> str | None:
    value = os.environ.get(ENV_PREFIX + name)
    return value.strip() if value and value.strip() else None


def load_settings(env_file: Path | None = None) -> Settings:
    """Build Settings from PATTERN_OPTIMIZER_* environment variables.

    Values already in the environment take precedence over the .env file.
    Invalid values are logged and replaced by defaults.

    Args:
        env_file: Explicit .env path; by default python-dotenv searches
                  from the working directory upwards.
    """
    load_dotenv(env_file or find_dotenv(usecwd=True))
    settings = Settings()

    seed = _env("SEED")
    if seed is not None:
        try:
            settings.seed = int(seed)
        except ValueError:
            logger.warning("Ignoring non-integer %sSEED=%r", ENV_PREFIX, seed)

    types = _env("TYPES")
    if types is not None:
        try:
            settings.optimization_types = parse_optimization_types(types)
        except ValueError as e:
            logger.warning("Ignoring %sTYPES: %s", ENV_PREFIX, e)

    output_format = _env("FORMAT")
    if output_format is not None:
        if output_format.lower() in OUTPUT_FORMATS:
            settings.output_format = output_format.lower()
        else:
            logger.warning("Ignoring unknown %sFORMAT=%r", ENV_PREFIX, output_format)

    log_level = _env("LOG_LEVEL")
    if log_level is not None:
        settings.log_level = log_level.upper()

    domains_file = _env("DOMAINS_FILE")
    if domains_file is not None:
        settings.domains_file = Path(domains_file)

    return settings
