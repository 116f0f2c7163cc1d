import json
import logging
from datetime import datetime
from typing import Optional

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger("healthtrackr.debug")


def setup_logging(level: Optional[str] = None) -> logging.Logger:
    """
    Configure the root logger once at startup.
    Repeated calls replace the handler instead of stacking new ones.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO))

    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    return root


def log_debug(event: str, data: dict):
    """
    Logs structured debug info if enabled.
    """
    if not settings.AI_DEBUG_MODE:
        return

    entry = {
        "timestamp": datetime.now().isoformat(),
        "event": event,
        "data": data
    }

    logger.info(json.dumps(entry, indent=2, default=str))
