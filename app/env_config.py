import os
import json
from functools import lru_cache
from pathlib import Path

CREDENTIALS_PATH = Path(__file__).resolve().parent.parent / 'credentials.json'


def get_django_env() -> str:
    """DJANGO_ENV from the environment: 'DEV' (default), 'TEST' or 'PROD'."""
    return os.getenv('DJANGO_ENV', 'DEV')


@lru_cache(maxsize=None)
def _read_credentials() -> dict:
    # An unreadable or missing file means "use environment variables"
    try:
        with open(CREDENTIALS_PATH, encoding='utf-8') as f:
            return json.load(f)
    except (OSError, json.JSONDecodeError):
        return {}


def load_credential(key_name: str, default: str = '') -> str:
    """
    Load a credential from credentials.json, then the environment,
    then fall back to default.
    """
    value = _read_credentials().get(key_name)
    if value:
        return value
    return os.getenv(key_name, default)
