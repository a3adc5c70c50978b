"""Package wide logger rendered through rich."""
import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "shunting_yard"


def configure_logger(name: str = LOGGER_NAME, level: int = logging.INFO) -> logging.Logger:
    """
    Return the named logger with a single rich console handler attached.

    Records go to stderr, stdout is left to the converted output.
    Calling it again replaces the previous handler, so the level can be changed
    at runtime (e.g. from the CLI) without duplicating output.

    :param str name: Logger name
    :param int level: Logging level

    :return: Configured logger
    :rtype: logging.Logger
    """
    log = logging.getLogger(name)
    log.setLevel(level)

    # Remove old handlers to avoid duplicates
    if log.hasHandlers():
        log.handlers.clear()

    console_handler = RichHandler(console=Console(stderr=True), show_time=True, show_level=True, show_path=False)
    console_handler.setLevel(level)
    log.addHandler(console_handler)
    return log


logger = configure_logger()
