from __future__ import annotations

import logging
from typing import Optional

from obstaclepath.config import Settings, settings as default_settings

_HANDLER_NAME = "obstaclepath-stream"


def configure_logging(cfg: Optional[Settings] = None, force: bool = False) -> logging.Logger:
    """Attach one stream handler to the package logger.

    Only the first call configures anything; later calls return the logger
    untouched unless force=True, which refreshes level and format.
    """
    cfg = cfg or default_settings
    logger = logging.getLogger("obstaclepath")

    handler = next((h for h in logger.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is not None and not force:
        return logger
    if handler is None:
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        logger.addHandler(handler)
    logger.setLevel(cfg.log_level.upper())
    handler.setFormatter(logging.Formatter(cfg.log_format))
    return logger
