import logging

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: str = "WARNING"):
    """
    Configure logging with RichHandler.
    Logs go to stderr so that command output on stdout stays machine-readable.
    """
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True), rich_tracebacks=True, show_path=False
            )
        ],
    )
