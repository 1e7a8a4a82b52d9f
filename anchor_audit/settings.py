"""
Process-level settings for anchor_audit.

Values come from the environment so the engine can run inside workers,
scripts or a web process without code changes:

- ``ANCHOR_AUDIT_LOG_LEVEL``: log level for the console handler (default INFO).
- ``ANCHOR_AUDIT_CONFIG``: optional YAML file merged over the engine defaults.
"""

from __future__ import annotations

import logging.config
import os

from .engine.config import EngineConfig, load_config

CONFIG_PATH = os.getenv('ANCHOR_AUDIT_CONFIG') or None

log_level = os.getenv('ANCHOR_AUDIT_LOG_LEVEL', 'INFO').upper()
LOGGING = {
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
        'anchor_audit': {
            'handlers': ['console'],
            'level': log_level,
            'propagate': False,
        },
    },
}


def configure_logging() -> None:
    """Install the LOGGING dictionary on the logging module."""

    logging.config.dictConfig(LOGGING)


def engine_config() -> EngineConfig:
    """Return the engine configuration named by the environment."""

    return load_config(CONFIG_PATH)
