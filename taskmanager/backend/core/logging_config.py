import logging
import sys
from typing import Optional, Union

from taskmanager.backend.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
HANDLER_NAME = "taskmanager"


def setup_logging(level: Optional[Union[int, str]] = None) -> None:
    """Root logger to stdout at ``level``, or LOG_LEVEL when not given.

    Handlers installed by others (uvicorn, pytest) are left in place; only a
    second call is a no-op.
    """
    if level is None:
        level = get_settings().log_level
    if isinstance(level, str):
        level = level.strip().upper()

    root = logging.getLogger()
    if any(h.get_name() == HANDLER_NAME for h in root.handlers):
        return
    root.setLevel(level)
    h = logging.StreamHandler(sys.stdout)
    h.set_name(HANDLER_NAME)
    h.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(h)
    # SQL echo stays off unless the root itself is at DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if root.level <= logging.DEBUG else logging.WARNING
    )
