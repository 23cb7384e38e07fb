"""
Logging setup for the API process and the maintenance scripts.

Records go to stderr and, when ``LOG_FILE`` is set, to that file as
well.  The handlers installed here are named, so calling
``setup_logging`` again (a second ``create_app``, the seed script
after the app) neither duplicates them nor touches handlers that a
server or test runner attached to the root logger.
"""

import logging
from pathlib import Path
from typing import Optional


LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

CONSOLE_HANDLER = "volunteer_api.console"
FILE_HANDLER = "volunteer_api.file"


def _named_handler(handler: logging.Handler, name: str) -> logging.Handler:
    handler.set_name(name)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    return handler


def setup_logging(level: str = "INFO", logfile: Optional[str] = None) -> None:
    """Configure the root logger.

    ``level`` is a level name, case insensitive; unknown names fall
    back to ``INFO``.  ``logfile`` is created along with its parent
    directory if needed.
    """
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    installed = {handler.get_name() for handler in root.handlers}
    if CONSOLE_HANDLER not in installed:
        root.addHandler(_named_handler(logging.StreamHandler(), CONSOLE_HANDLER))

    if logfile and FILE_HANDLER not in installed:
        log_path = Path(logfile).resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        root.addHandler(
            _named_handler(logging.FileHandler(log_path, encoding="utf-8"), FILE_HANDLER)
        )
