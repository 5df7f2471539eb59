"""
Thread-safe rate-limited logging utilities.

Used for warnings that can repeat on every response (for instance a node
that keeps returning bodies the classifier can't decode), so they show up
once per interval instead of flooding the log.
"""
import logging
import threading
from typing import Optional

from cachetools import TTLCache

# Minimum interval between identical logs in seconds
LOG_INTERVAL = 60

logger = logging.getLogger(__name__)

_log_cache: TTLCache = TTLCache(maxsize=256, ttl=LOG_INTERVAL)
_log_cache_lock = threading.RLock()


def rate_limited_log(
    message: str,
    level: str = "warning",
    logger_instance: Optional[logging.Logger] = None
) -> bool:
    """
    Log a message with rate limiting, in a thread-safe manner.

    Args:
        message: Message to log
        level: Log level (debug, info, warning, error, critical)
        logger_instance: Logger to use (defaults to module logger)

    Returns:
        True if the message was emitted, False if it was suppressed
    """
    log_instance = logger_instance or logger
    log_method = getattr(log_instance, level.lower(), log_instance.warning)

    # Loggers are part of the key so one client can't silence another
    key = (id(log_instance), level.lower(), message)

    with _log_cache_lock:
        if key in _log_cache:
            return False
        log_method(message)
        _log_cache[key] = True
    return True


def reset() -> None:
    """Forget every rate-limited message."""
    with _log_cache_lock:
        _log_cache.clear()
