import logging

from .config import SETTINGS

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def setup_logging(level: int | None = None) -> None:
    """
    Set up root logger with a stream handler.

    ``level`` defaults to ``SETTINGS.LOG_LEVEL``. Calling this more than once is
    a no-op so tests and the ASGI app can both invoke it.
    """
    root = logging.getLogger()
    if root.handlers:
        return  # already configured
    root.setLevel(SETTINGS.log_level if level is None else level)
    fmt = logging.Formatter(LOG_FORMAT)
    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    root.addHandler(ch)
