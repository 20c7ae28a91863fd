"""
Logging setup for ledgerlens.

Routes records to stdout in a single pipe-separated format and keeps the
Google client libraries at WARNING so request traces stay out of analysis logs.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
QUIET_LOGGERS = ("google", "urllib3")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging at ``level`` and quiet third-party transports."""
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, stream=sys.stdout)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


__all__ = ["LOG_FORMAT", "configure_logging"]
