# cminus/logging_config.py

import logging
import logging.config
import os
from pathlib import Path
from typing import Optional

LOGGER_NAME = "cminus"


def setup_logging(log_level: str = "WARNING", log_file: Optional[str] = None) -> None:
    """
    Set up logging for the cminus package.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a log file; console output goes to stderr
    """
    log_level = log_level.upper()

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)

    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'detailed': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s',
                'datefmt': '%Y-%m-%d %H:%M:%S'
            },
            'simple': {
                'format': '%(levelname)s - %(name)s - %(message)s'
            }
        },
        'handlers': {
            'console': {
                'class': 'logging.StreamHandler',
                'level': log_level,
                'formatter': 'simple',
                'stream': 'ext://sys.stderr'
            }
        },
        'loggers': {
            LOGGER_NAME: {
                'level': log_level,
                'handlers': ['console'],
                'propagate': False
            }
        }
    }

    if log_file:
        config['handlers']['file'] = {
            'class': 'logging.FileHandler',
            'level': 'DEBUG',
            'formatter': 'detailed',
            'filename': log_file,
            'encoding': 'utf8'
        }
        config['loggers'][LOGGER_NAME]['handlers'].append('file')
        config['loggers'][LOGGER_NAME]['level'] = 'DEBUG'

    logging.config.dictConfig(config)


def level_from_env(default: str = "WARNING") -> str:
    """Log level taken from CMINUS_LOG_LEVEL, if set to a known level name."""
    level = os.getenv('CMINUS_LOG_LEVEL', default).upper()
    if not isinstance(logging.getLevelName(level), int):
        return default.upper()
    return level
