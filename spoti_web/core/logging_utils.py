import logging

# Application logger; handlers come from configure_logging()
logger = logging.getLogger("spoti_web")

STEP_MARK = "→"
SUCCESS_MARK = "✅"
WARNING_MARK = "⚠️"
ERROR_MARK = "❌"


def _emit(level: int, mark: str | None, message: str) -> None:
    if mark:
        logger.log(level, "%s %s", mark, message)
    else:
        logger.log(level, "%s", message)


def log_info(message: str) -> None:
    _emit(logging.INFO, None, message)


def log_step(message: str) -> None:
    """
    Work about to start (a Spotify call sequence, a token refresh...).
    """
    _emit(logging.INFO, STEP_MARK, message)


def log_success(message: str) -> None:
    _emit(logging.INFO, SUCCESS_MARK, message)


def log_warning(message: str) -> None:
    _emit(logging.WARNING, WARNING_MARK, message)


def log_error(message: str) -> None:
    _emit(logging.ERROR, ERROR_MARK, message)


def log_retry(
    operation: str, attempt: int, max_attempts: int, error: BaseException
) -> None:
    """
    A failed Spotify call that is going to be attempted again.

    Example:
      log_retry("playlist_items", 1, 3, err)
      -> "⚠️ playlist_items failed (attempt 1/3): <err>"
    """
    logger.warning(
        "%s %s failed (attempt %d/%d): %s",
        WARNING_MARK,
        operation,
        attempt,
        max_attempts,
        error,
    )
