import logging
import sys

from core.config import LOG_FILE


def setup_logger(name="wled_backup", debug=False, log_file=LOG_FILE):
    """
    Sets up a logger that writes diagnostics to stderr and, optionally, a file.

    stdout is left to the progress lines printed by the CLI.
    Safe to call repeatedly: handlers are only attached once, the level is
    always updated.
    """
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    if log_file:
        try:
            fh = logging.FileHandler(log_file)
        except OSError as e:
            logger.warning(f"Could not set up file logging: {e}")
        else:
            fh.setFormatter(formatter)
            logger.addHandler(fh)

    return logger

# Global instance for easy import
log = setup_logger()
