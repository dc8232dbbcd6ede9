import logging
import sys
from typing import Optional

from pythonjsonlogger.jsonlogger import JsonFormatter

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
JSON_LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def setup_logging(level: Optional[str] = None, json: Optional[bool] = None, stream=None) -> logging.Handler:
    """
    Set up root logger with a single stream handler (plain text or JSON lines).
    Defaults for level and format come from the config.
    """
    if level is None or json is None:
        from opensearchgeo.config import get_config

        config = get_config()
        level = level or config.log_level
        json = config.log_json if json is None else json

    handler = logging.StreamHandler(stream=stream or sys.stderr)
    if json:
        handler.setFormatter(JsonFormatter(JSON_LOG_FORMAT))
    else:
        handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if getattr(existing, "_opensearchgeo", False):
            root_logger.removeHandler(existing)
    handler._opensearchgeo = True
    root_logger.addHandler(handler)
    root_logger.setLevel(level.upper())
    return handler
