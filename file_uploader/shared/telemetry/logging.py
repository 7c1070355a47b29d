"""Process logging setup: one stdout handler tagged with the request ID."""

import logging
import sys

from file_uploader.core.config import get_settings
from file_uploader.middleware.request_id import RequestIDLogFilter

LOG_FORMAT = "%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s: %(message)s"

HANDLER_NAME = "file_uploader"

# Chatty at DEBUG; kept at WARNING unless something goes wrong.
QUIET_LOGGERS = ("botocore", "boto3", "s3transfer", "urllib3", "multipart")


def setup_logging() -> None:
    """Attach the stdout handler to the root logger (DEBUG in debug mode, else INFO).

    Safe to call more than once: the API lifespan and the upload script both
    call it, and the handler is only installed the first time.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if get_settings().debug else logging.INFO)

    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.addFilter(RequestIDLogFilter())
        handler.set_name(HANDLER_NAME)
        root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
