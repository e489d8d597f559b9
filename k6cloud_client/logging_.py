from __future__ import annotations

import logging
from typing import TextIO

PACKAGE_LOGGER = "k6cloud_client"
LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def setup_logging(verbose: bool = False, *, stream: TextIO | None = None) -> logging.Logger:
    """Send the package's log records to a stream.

    Meant for applications embedding the client; the library itself only
    installs a NullHandler and leaves the root logger alone.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    handler = next((h for h in logger.handlers if isinstance(h, logging.StreamHandler)), None)
    if handler is None:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    elif stream is not None:
        handler.setStream(stream)

    # request lines from httpx only when verbose
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(level)
    return logger
