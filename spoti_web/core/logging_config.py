import logging
import sys

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

# Third-party loggers that are too chatty at INFO
QUIET_LOGGERS = ("spotipy.client", "urllib3.connectionpool")


def configure_logging(level: int | str = logging.INFO) -> None:
    """
    Send application logs to stdout at ``level`` (a level number or name
    such as "DEBUG").

    Safe to call more than once: uvicorn reloads and the test client import
    the app repeatedly, so an existing root handler is reused.
    """
    root = logging.getLogger()
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.ERROR)

    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    root.addHandler(handler)
