"""Logging setup for the quiz API.

Modules log through ``logging.getLogger(__name__)`` with short
``[tag] key=value`` messages; ``configure_logging`` wires the root logger to
stdout once at startup.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(level: int | str = "INFO") -> logging.Logger:
    """Configure root logging to stdout.

    Args:
        level: Logging level as int or string (e.g., logging.INFO or "INFO").

    Returns:
        The package logger, named "quizbank".
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.basicConfig(level=level, handlers=[handler], force=True)
    return logging.getLogger("quizbank")
