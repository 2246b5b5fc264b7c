"""
Configuration and logging setup.

Settings come from environment variables prefixed with MOVIE_CREDITS_
(or a local .env file), e.g.:

    MOVIE_CREDITS_CREDITS_PATH=data/tmdb_5000_credits.csv
    MOVIE_CREDITS_RESULTS_DIR=Results
    MOVIE_CREDITS_LOG_LEVEL=DEBUG
"""

import sys
from typing import Optional

from loguru import logger
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	"""Application settings with environment variable support"""

	model_config = SettingsConfigDict(env_prefix='MOVIE_CREDITS_', env_file='.env', extra='ignore')

	credits_path: Optional[str] = None  # None: first *.csv in the working directory
	results_dir: str = 'Results'
	log_level: str = 'INFO'
	log_file: Optional[str] = None
	suggestion_threshold: float = 85.0  # rapidfuzz score cutoff for name suggestions


def setup_logging(level: str = 'INFO', log_file: Optional[str] = None) -> None:
	"""Replace loguru's default sink with one at the requested level."""
	logger.remove()
	logger.add(sys.stderr, level=level.upper())
	if log_file:
		logger.add(log_file, level=level.upper(), rotation='10 MB', retention=5, encoding='utf-8')
