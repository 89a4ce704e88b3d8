"""
Logging setup for the linking service.

One stdout handler with a pipe-separated format; HTTP client chatter is kept
at WARNING so request URLs (which carry OAuth codes) stay out of the logs.
"""

import logging
import sys

_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging and quiet the HTTP client loggers."""
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["configure_logging"]
