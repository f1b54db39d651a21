import os
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)


def ensure_env_loaded(path: str = ".env") -> bool:
    """Load ``.env`` unless SOULTRAP_CONFIG is already set in the environment."""
    if os.getenv("SOULTRAP_CONFIG"):
        return False
    env_path = Path(path).resolve()
    if not env_path.exists():
        logger.debug("Environment file not found at %s", env_path)
        return False
    load_dotenv(dotenv_path=env_path, override=False)
    logger.info("Loaded environment variables from %s", env_path)
    return True


def config_path_from_env(default: Optional[str] = None) -> Optional[str]:
    ensure_env_loaded()
    return os.getenv("SOULTRAP_CONFIG") or default
