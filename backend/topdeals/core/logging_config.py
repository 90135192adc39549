"""Logging setup for the topdeals service.

Every module logs through ``logging.getLogger(__name__)``, so all records land
under the ``topdeals`` logger configured here. Output goes to stderr only;
the service keeps no files.
"""

import logging
import sys

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Initialise the root ``topdeals`` logger.

    Args:
        level: Level name such as ``"DEBUG"`` or ``"INFO"``. Unknown names
            fall back to INFO.

    Returns:
        The configured ``topdeals`` logger.
    """
    root_logger = logging.getLogger("topdeals")
    root_logger.setLevel(getattr(logging, (level or "INFO").upper(), logging.INFO))

    # Prevent duplicate handlers when create_app() runs more than once (tests)
    if root_logger.handlers:
        return root_logger

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )
    root_logger.addHandler(console_handler)

    root_logger.debug("Logging initialised at level %s", logging.getLevelName(root_logger.level))
    return root_logger
