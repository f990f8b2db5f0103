import logging
import sys

from termcolor import colored

LEVEL_COLOURS = {
    logging.DEBUG: "dark_grey",
    logging.WARNING: "yellow",
    logging.ERROR: "red",
    logging.CRITICAL: "red",
}


class ColourFormatter(logging.Formatter):
    def format(self, record):
        message = super().format(record)
        colour = LEVEL_COLOURS.get(record.levelno)
        if colour:
            return colored(message, colour)
        return message


def get_logger(name=None):
    return logging.getLogger(name or "m3u_cleaner")


def setup_logging(verbose=False, stream=None):
    """Attach one coloured console handler to the package logger."""
    logger = logging.getLogger("m3u_cleaner")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(ColourFormatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger


def banner(message):
    return colored(message, "cyan")
