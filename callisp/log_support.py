"""
    Logging setup for the callisp command line and servers. Level names are
    colored on VT-100 terminals; the optional log file always gets plain text.
"""

import logging
import os

# handlers below write to stderr
has_a_tty = os.isatty(2)

LOG_FORMAT = '%(asctime)s %(levelname)s %(name)s: %(message)s'
DATE_FORMAT = '%H:%M:%S'


def color_me(color):
    """Return a function that wraps a message in the escape codes for `color`."""
    start = "\033[1;%dm" % (30 + color)
    reset = "\033[0m"

    def paint(msg):
        return start + msg + reset
    return paint


class ColoredFormatter(logging.Formatter):
    """Pads the level name to a fixed width and colors it by severity."""

    BLACK, RED, GREEN, YELLOW, BLUE, MAGENTA, CYAN, WHITE = range(8)

    level_colors = {
        logging.DEBUG: color_me(BLUE),
        logging.INFO: color_me(GREEN),
        logging.WARNING: color_me(YELLOW),
        logging.ERROR: color_me(RED),
        logging.CRITICAL: color_me(RED),
    }

    def __init__(self, fmt, use_color=True, datefmt=None):
        logging.Formatter.__init__(self, fmt, datefmt=datefmt)
        self.use_color = use_color and has_a_tty

    def format(self, record):
        # the record is shared with the file handler; restore it afterwards
        saved = record.levelname
        padded = saved.ljust(8)
        paint = self.level_colors.get(record.levelno)
        record.levelname = paint(padded) if self.use_color and paint else padded
        try:
            return logging.Formatter.format(self, record)
        finally:
            record.levelname = saved


def setup_loggers(def_level=logging.WARNING, log_fname=None):
    """Configure the 'callisp' logger: stderr at `def_level`, plus a debug file if given."""
    logger = logging.getLogger('callisp')
    logger.setLevel(logging.DEBUG)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setLevel(def_level)
    console.setFormatter(ColoredFormatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(console)

    if log_fname is not None:
        to_file = logging.FileHandler(log_fname, encoding='utf-8')
        to_file.setLevel(logging.DEBUG)
        to_file.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(to_file)

    return logger
