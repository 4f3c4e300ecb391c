"""Logging configuration helpers."""

import logging

PACKAGE_LOGGER = "calorie_tracker"
_HANDLER_NAME = "calorie_tracker.stream"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach the package stream handler once and apply ``level``.

    Calling again (for example from a second app instance in tests) only
    changes the level.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level.upper())
    logger.propagate = False
    if not any(handler.get_name() == _HANDLER_NAME for handler in logger.handlers):
        handler = logging.StreamHandler()
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)
    return logger
