import logging
import sys

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(level: str = "WARNING") -> None:
    """
    Configure the root logger with a single console handler on stderr.

    stdout is left to command output so it can be piped.
    """
    # drop handlers from earlier calls (or basicConfig) to avoid duplicate lines
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)

    logging.root.setLevel(level.upper())

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logging.root.addHandler(console_handler)

    logging.captureWarnings(True)
