"""Configuration for the campus job matcher.

``settings.py`` is the local, editable copy of ``settings.example.py`` and is
created from it on first import. Environment variables (and a ``.env`` file)
override the values in either.
"""

import logging
import shutil
from pathlib import Path

logger = logging.getLogger(__name__)

_CONFIG_DIR = Path(__file__).parent
_SETTINGS_FILE = _CONFIG_DIR / "settings.py"
_EXAMPLE_FILE = _CONFIG_DIR / "settings.example.py"


def ensure_local_settings(settings_file: Path = _SETTINGS_FILE, example_file: Path = _EXAMPLE_FILE) -> bool:
    """Create the local settings module from the example when it is missing.

    Returns True when a settings module is in place afterwards.
    """
    if settings_file.exists():
        return True
    if not example_file.exists():
        logger.error(f"Neither {settings_file} nor {example_file} exists")
        return False
    try:
        shutil.copy2(example_file, settings_file)
    except OSError as e:
        logger.warning(f"Could not create {settings_file} from {example_file}: {e}")
        return False
    logger.info(f"Created {settings_file} from {example_file}")
    return True


ensure_local_settings()

from .settings import *
