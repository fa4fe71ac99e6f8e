"""
Logging utilities for the Lambda skill handler and the FastAPI endpoint.
"""

import logging
import sys

# Per-request chatter from these libraries stays at WARNING unless debugging.
_CHATTY_LOGGERS = ("botocore", "boto3", "urllib3", "httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with a sensible default format."""
    level = level.upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        stream=sys.stdout,
    )
    # basicConfig is a no-op under the Lambda runtime, which installs its own handler.
    logging.getLogger().setLevel(level)

    library_level = logging.DEBUG if level == "DEBUG" else logging.WARNING
    for name in _CHATTY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)


__all__ = ["configure_logging"]
