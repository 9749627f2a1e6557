import logging
import os

from rich.console import Console
from rich.logging import RichHandler

# Shared by the log handler and the progress bar so they don't draw over each other
console = Console(stderr=True)

LOG_LEVEL_ENV = "COURSEDESC_LOG"


def setup_logging(level: str | None = None) -> None:
    """
    Sends log records to stderr through rich. The level comes from the argument,
    then from the COURSEDESC_LOG environment variable, and defaults to INFO.
    """
    level = (level or os.environ.get(LOG_LEVEL_ENV) or "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    # urllib3 logs every connection at DEBUG
    logging.getLogger("urllib3").setLevel(logging.WARNING)
