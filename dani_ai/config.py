"""Configuration for the Dani.ai photo editor.

Settings are read from the environment. A ``.env`` file in the working
directory is loaded first, so the API credential can be supplied out-of-band
without exporting it in the shell.
"""

import os
import logging
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

# Environment variables checked for the API credential, in order
API_KEY_VARIABLES = ("GEMINI_API_KEY", "API_KEY", "GOOGLE_API_KEY")

DEFAULT_MODEL = "gemini-2.5-flash-image"
DEFAULT_CAMERA_DEVICES = "0"
DEFAULT_DOWNLOAD_PREFIX = "dani-ai"
DEFAULT_LOG_LEVEL = "INFO"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def get_api_key() -> Optional[str]:
    """Return the first non-empty API key found in the environment."""
    for name in API_KEY_VARIABLES:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return None


def parse_camera_devices(value: str) -> List[int]:
    """Parse a comma-separated list of camera device indices.

    Entries that are not integers are skipped. An empty result falls back to
    device 0.

    Args:
        value: String such as ``"1,0"`` (preferred device first)

    Returns:
        List of device indices
    """
    devices = []
    for item in value.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            devices.append(int(item))
        except ValueError:
            logger.warning(f"Ignoring invalid camera device: {item!r}")
    return devices or [0]


def get_settings() -> Dict[str, Any]:
    """Collect all settings from the environment.

    Returns:
        Settings dictionary with the keys ``api_key``, ``model``,
        ``camera_devices``, ``download_prefix`` and ``log_level``
    """
    return {
        'api_key': get_api_key(),
        'model': os.environ.get('DANI_MODEL', DEFAULT_MODEL),
        'camera_devices': parse_camera_devices(
            os.environ.get('DANI_CAMERA_DEVICES', DEFAULT_CAMERA_DEVICES)
        ),
        'download_prefix': os.environ.get('DANI_DOWNLOAD_PREFIX', DEFAULT_DOWNLOAD_PREFIX),
        'log_level': os.environ.get('DANI_LOG_LEVEL', DEFAULT_LOG_LEVEL).upper(),
    }


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for an entry point (CLI or web app)."""
    level_name = level or get_settings()['log_level']
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT)
