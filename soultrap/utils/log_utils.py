import logging, os, sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def resolve_level(level: Union[str, int, None] = None) -> int:
    """
    ``--log-level`` value first, then ``$LOG_LEVEL``, then INFO.
    Accepts level names in any case ("debug", "WARNING") or numbers ("10", 30).
    """
    value = level if level not in (None, "") else os.getenv("LOG_LEVEL")
    if value in (None, ""):
        return logging.INFO
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.isdigit():
        return int(text)
    resolved = logging.getLevelName(text.upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def get_logger(name: str = "soultrap", level: Optional[Union[str, int]] = None) -> logging.Logger:
    """
    Package logger with a single stdout handler. Module loggers
    (``soultrap.capture``, ``soultrap.allocator.*``) propagate into it.
    An explicit ``level`` is applied even when the handler already exists.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        if level is not None:
            logger.setLevel(resolve_level(level))
        return logger
    logger.setLevel(resolve_level(level))
    ch = logging.StreamHandler(sys.stdout)
    ch.setFormatter(logging.Formatter(LOG_FORMAT, DATE_FORMAT))
    logger.addHandler(ch)
    return logger
