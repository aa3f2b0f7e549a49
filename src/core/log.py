# core/log.py
import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

def setup_logging(level: str = "INFO", stream=None) -> logging.Logger:
    """
    Configure the root logger with a single console handler.

    Diagnostics always go to stderr by default so that image data written to
    stdout stays clean. Calling this again replaces the console handler, so
    the root logger never holds more than one.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Stream for the console handler, defaults to sys.stderr

    Returns:
        The configured root logger
    """
    logger = logging.getLogger()
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logger.setLevel(numeric_level)

    # The old handler's stream may already be closed, so it is dropped
    # without flushing.
    for handler in list(logger.handlers):
        if getattr(handler, "_pathtracer_console", False):
            logger.removeHandler(handler)

    console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    console_handler._pathtracer_console = True
    logger.addHandler(console_handler)
    return logger
