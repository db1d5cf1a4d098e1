from __future__ import annotations

import hashlib
import logging
import threading
import traceback
from datetime import UTC, datetime, timedelta
from typing import Any

from .settings import settings

logger = logging.getLogger(__name__)

# Thread-safe storage for deduplication of recent errors
_RECENT_SIGNATURES: dict[str, datetime] = {}
_SIGNATURES_LOCK = threading.Lock()


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _error_signature(*, operation: str, exc: BaseException) -> str:
    material = f"{operation}|{type(exc).__name__}|{str(exc)}".encode("utf-8", errors="replace")
    return hashlib.sha256(material).hexdigest()


def format_traceback(exc: BaseException, max_chars: int | None = None) -> str:
    """Format an exception with its traceback, keeping the tail when too long."""
    limit = settings.max_traceback_chars if max_chars is None else max_chars
    tb_text = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    if limit > 0 and len(tb_text) > limit:
        tb_text = tb_text[-limit:]
    return tb_text


def record_error(
    *,
    source: str,
    operation: str,
    exc: BaseException,
    context: dict[str, Any] | None = None,
    dedupe_window_seconds: int | None = None,
    include_traceback: bool = True,
) -> str | None:
    """Log an unexpected error once per dedupe window.

    Identical errors (same operation, type and message) seen again within
    the window are suppressed.

    Returns the error signature when logged, None when suppressed.
    """

    window = settings.error_dedupe_seconds if dedupe_window_seconds is None else dedupe_window_seconds
    signature = _error_signature(operation=operation, exc=exc)
    now = _utcnow()

    if window > 0:
        cutoff = now - timedelta(seconds=window)
        with _SIGNATURES_LOCK:
            last_seen = _RECENT_SIGNATURES.get(signature)
            if last_seen is not None and last_seen >= cutoff:
                return None
            _RECENT_SIGNATURES[signature] = now
            # Prune old entries to prevent memory growth
            stale = [k for k, v in _RECENT_SIGNATURES.items() if v < cutoff]
            for k in stale:
                del _RECENT_SIGNATURES[k]

    logger.error(
        "%s: %s failed [%s] %s: %s context=%s",
        source,
        operation,
        signature[:12],
        type(exc).__name__,
        exc,
        context or {},
        exc_info=(type(exc), exc, exc.__traceback__) if include_traceback else None,
    )
    return signature


def clear_recent_errors() -> None:
    """Forget deduplication state."""
    with _SIGNATURES_LOCK:
        _RECENT_SIGNATURES.clear()
