"""Utility modules for the site data pipeline."""

from pipeline.utils.geo import get_center, has_coordinates, is_valid_coordinates
from pipeline.utils.http import HTTPError, fetch_with_retry
from pipeline.utils.logging import setup_logging
from pipeline.utils.text import clean_value, is_missing, split_on, title_case

__all__ = [
    # HTTP utilities
    "fetch_with_retry",
    "HTTPError",
    # Logging
    "setup_logging",
    # Geographic utilities
    "is_valid_coordinates",
    "has_coordinates",
    "get_center",
    # Text utilities
    "clean_value",
    "is_missing",
    "split_on",
    "title_case",
]
