"""Core constants used across the Kaggle client modules.

This module centralizes API endpoints, defaults, and file naming rules.
Keeping values here avoids magic literals in pipeline logic.
"""

from __future__ import annotations

from pathlib import Path

CLIENT_VERSION = "0.1.0"
BASE_URL = "https://www.kaggle.com/api/v1"
DATASET_VIEW_ENDPOINT = "/datasets/view"
DATASET_DOWNLOAD_ENDPOINT = "/datasets/download"
DATASET_FILES_ENDPOINT = "/datasets/data"
REQUIRED_HEADERS = {
    "User-Agent": f"Kaggle Python Client/{CLIENT_VERSION}",
    "Accept": "application/json",
}

DEFAULT_DOWNLOAD_ROOT = Path("./downloads")
DEFAULT_CACHE_ROOT = Path("./cache")
DEFAULT_CREDENTIALS_FILE = Path("./kaggle.json")
DEFAULT_TIMEOUT_SECONDS = 30.0

USERNAME_ENV_VAR = "KAGGLE_USERNAME"
API_KEY_ENV_VAR = "KAGGLE_KEY"
DOWNLOAD_ROOT_ENV_VAR = "KAGGLE_DOWNLOAD_ROOT"
CACHE_ROOT_ENV_VAR = "KAGGLE_CACHE_ROOT"
TIMEOUT_ENV_VAR = "KAGGLE_TIMEOUT"

CREDENTIALS_USERNAME_FIELD = "username"
CREDENTIALS_KEY_FIELD = "key"

PARSED_CACHE_SUFFIX = "_parsed.json"
ARCHIVE_SUFFIX = ".zip"
CSV_EXTENSION = ".csv"
DATASET_PATH_SEPARATOR = "/"
FLAT_NAME_SEPARATOR = "_"
