import logging
import sys
from typing import Optional, TextIO


def setup_logger(name: str = "mongo_dataimport", level=logging.INFO, stream: Optional[TextIO] = None):
    """
    Attaches a console handler to the package logger for CLI runs.
    Defaults to stderr: the CLI writes rows to stdout.
    A host pipeline embedding the data source configures logging itself and never calls this.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Only this logger's own handlers count; a host's root handlers don't stop CLI output
    if logger.handlers:
        return logger

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    logger.addHandler(handler)

    return logger
