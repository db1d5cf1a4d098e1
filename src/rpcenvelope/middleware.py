"""Logging-backed lifecycle callbacks for `RpcDispatcher`."""

from __future__ import annotations

import logging
from typing import Any

from .errors import record_error
from .rpc_dispatcher import LoggerMiddleware

logger = logging.getLogger(__name__)


def logging_middleware(source: str = "rpc") -> LoggerMiddleware:
    """Log calls and results at DEBUG and report unexpected errors via `record_error`."""

    def on_call(method: str, params: list[Any]) -> None:
        logger.debug("%s call %s params=%d", source, method, len(params))

    def on_success(method: str, result: Any, params: list[Any]) -> None:
        logger.debug("%s success %s result=%s", source, method, type(result).__name__)

    def on_error(method: str, exc: BaseException, params: list[Any]) -> None:
        record_error(
            source=source,
            operation=f"rpc:{method}",
            exc=exc,
            context={"params": len(params)},
            # The dispatcher already logged the traceback
            include_traceback=False,
        )

    return LoggerMiddleware(on_call=on_call, on_success=on_success, on_error=on_error)
