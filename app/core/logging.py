import logging
import sys
from typing import Iterable

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

# Per-request access lines drown out DEADLINE_* events
NOISY_LOGGERS = ("uvicorn.access",)


def setup_logging(level: str = "INFO", quiet: Iterable[str] = NOISY_LOGGERS) -> None:
    """
    Route all service logs to stdout in the pipe-delimited event format.

    Unknown level names fall back to INFO; loggers listed in `quiet`
    are held at WARNING regardless of `level`.
    """
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)
