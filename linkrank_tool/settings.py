"""
Start-up settings for the linkrank tool.

Values come from the environment so a crawl or retrieval run can be tuned
without code changes. Engine parameters (damping, iterations, rank weight)
live in an optional YAML file named by ``LINKRANK_CONFIG``; the remaining
variables override individual entries of that file.
"""

from __future__ import annotations

import logging.config
import os
from pathlib import Path
from typing import Any, Dict

from linkrank.engine.config import EngineConfig, load_config
from linkrank.engine.exceptions import ConfigurationError


CONFIG_PATH = os.getenv('LINKRANK_CONFIG') or None

RANK_WEIGHT = os.getenv('LINKRANK_RANK_WEIGHT')

log_level = os.getenv('LINKRANK_LOG_LEVEL', 'INFO').upper()
LOGGING: Dict[str, Any] = {
    'version': 1,
    'disable_existing_loggers': False,
    'formatters': {
        'plain': {
            'format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
        },
    },
    'handlers': {
        'console': {
            'class': 'logging.StreamHandler',
            'formatter': 'plain',
        },
    },
    'root': {
        'handlers': ['console'],
        'level': log_level,
    },
    'loggers': {
        'linkrank': {
            'handlers': ['console'],
            'level': log_level,
            'propagate': False,
        },
    },
}


def configure_logging(level: str | None = None) -> None:
    """Apply :data:`LOGGING`, optionally overriding the level."""

    config = LOGGING
    if level:
        config = dict(LOGGING)
        config['root'] = dict(LOGGING['root'], level=level.upper())
        config['loggers'] = {'linkrank': dict(LOGGING['loggers']['linkrank'], level=level.upper())}
    try:
        logging.config.dictConfig(config)
    except ValueError as exc:
        raise ConfigurationError(f"invalid logging configuration: {exc}") from exc


def engine_config(path: str | Path | None = None) -> EngineConfig:
    """Load the engine configuration, applying environment overrides."""

    overrides: Dict[str, Any] = {}
    if RANK_WEIGHT is not None:
        try:
            overrides['rank_weight'] = float(RANK_WEIGHT)
        except ValueError as exc:
            raise ConfigurationError(f'LINKRANK_RANK_WEIGHT must be a number, got {RANK_WEIGHT!r}') from exc
    return load_config(path or CONFIG_PATH, overrides)
