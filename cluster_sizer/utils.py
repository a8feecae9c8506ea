# utils.py

"""Utility functions for the cluster sizer."""

import logging
import os
from typing import Optional

from .config import CATALOG_TOKEN_ENV, CATALOG_URL_ENV, LOG_FORMAT, LOG_DATE_FORMAT
from .exceptions import ConfigurationError

def setup_logging(verbose: bool = False) -> None:
    """Configure logging with appropriate level and format."""
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT
    )

def get_catalog_url() -> str:
    """
    Read the hardware catalog endpoint from the environment.
    Raises ConfigurationError if it is not set.
    """
    url = os.environ.get(CATALOG_URL_ENV)
    if not url:
        raise ConfigurationError(
            CATALOG_URL_ENV, "set in the environment to fetch the remote catalog", url
        )
    return url

def get_catalog_token() -> Optional[str]:
    return os.environ.get(CATALOG_TOKEN_ENV) or None
