"""
Demo API key generation for CyborgDB.

Issues temporary API keys from the CyborgDB demo service. The endpoint can be
overridden with the ``CYBORGDB_DEMO_ENDPOINT`` environment variable.
"""

import logging
import os
import time
from typing import Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_DEMO_ENDPOINT = "https://api.cyborgdb.co/v1/api-key/manage/create-demo-key"
DEFAULT_DESCRIPTION = "Temporary demo API key"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count != 1 else ''}"


def format_time_left(seconds: float) -> str:
    """Render a duration as its two most significant units, e.g. '2 days, 3 hours'."""
    seconds = max(0, int(seconds))
    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(minutes, 60)
    days, hours = divmod(hours, 24)

    if days:
        return f"{_plural(days, 'day')}, {_plural(hours, 'hour')}"
    if hours:
        return f"{_plural(hours, 'hour')}, {_plural(minutes, 'minute')}"
    if minutes:
        return f"{_plural(minutes, 'minute')}, {_plural(secs, 'second')}"
    return _plural(secs, "second")


def get_demo_api_key(description: Optional[str] = None) -> str:
    """
    Generate a temporary demo API key from the CyborgDB demo API service.

    Args:
        description: Description stored with the key. Defaults to
            "Temporary demo API key".

    Returns:
        str: The generated demo API key.

    Raises:
        ValueError: If the demo API key could not be generated.

    Example:
        >>> from cyborgdb import Client, get_demo_api_key
        >>> client = Client("https://your-instance.com", get_demo_api_key())
    """
    endpoint = os.getenv("CYBORGDB_DEMO_ENDPOINT") or DEFAULT_DEMO_ENDPOINT
    payload = {"description": description if description is not None else DEFAULT_DESCRIPTION}

    try:
        response = requests.post(
            endpoint,
            json=payload,
            headers={"Accept": "application/json"},
        )
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        error_msg = f"Failed to generate demo API key: {e}"
        logger.error(error_msg)
        raise ValueError(error_msg) from e

    api_key = data.get("apiKey") if isinstance(data, dict) else None
    if not api_key:
        error_msg = "Failed to generate demo API key: Demo API key not found in response."
        logger.error(error_msg)
        raise ValueError(error_msg)

    expires_at = data.get("expiresAt")
    if expires_at:
        logger.info("Demo API key will expire in %s", format_time_left(expires_at - time.time()))

    return api_key
