"""Server-side RPC dispatcher.

Parses a request body of the form ``{"method": str, "params": list}``, looks
up the handler, validates the params against the shared arguments schema,
invokes the handler and returns a response envelope. Every failure becomes
an error envelope; nothing raised inside `handle` escapes it.
"""

from __future__ import annotations

import inspect
import logging
import uuid
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .errors import format_traceback
from .models import RpcRequest
from .rpc.router import Handler, MethodRegistry
from .rpc.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    JSON,
    METHOD_NOT_FOUND,
    RequestFormatError,
    envelope_error,
    envelope_result,
)
from .rpc_validation import ParamsValidator, format_errors

logger = logging.getLogger(__name__)

UNKNOWN_METHOD = "unknown-method"


@dataclass(frozen=True)
class LoggerMiddleware:
    """Optional lifecycle callbacks, for telemetry only."""

    on_call: Callable[[str, list[Any]], None] | None = None
    on_success: Callable[[str, Any, list[Any]], None] | None = None
    on_error: Callable[[str, BaseException, list[Any]], None] | None = None


def parse_rpc_request(body: Any) -> RpcRequest:
    """Parse an RPC request body, raising `RequestFormatError` if malformed."""
    if not isinstance(body, Mapping):
        raise RequestFormatError(
            f"body request must be an object, {type(body).__name__}", INVALID_REQUEST
        )
    method = body.get("method")
    params = body.get("params")
    if method is None or method == "":
        raise RequestFormatError("request body missing method", INVALID_REQUEST)
    if not isinstance(method, str):
        raise RequestFormatError("request body method must be a string", INVALID_REQUEST)
    if params is None:
        raise RequestFormatError("request body missing params", INVALID_REQUEST)
    if not isinstance(params, (list, tuple)):
        raise RequestFormatError("request body params must be an array", INVALID_REQUEST)
    return RpcRequest(method=method, params=list(params))


def try_to_parse_rpc_request(body: Any) -> tuple[str | None, list[Any] | None]:
    """Best-effort parse used only to report unexpected errors."""
    try:
        request = parse_rpc_request(body)
    except Exception:  # noqa: BLE001
        return None, None
    return request.method, request.params


class RpcDispatcher:
    """Dispatch RPC requests to a set of method handlers.

    Args:
        methods: Mapping of method name to handler. A `MethodRegistry` also
            provides the arguments schema when `validator` is omitted.
        validator: A compiled `ParamsValidator`, or a raw arguments schema
            document to compile. None means the registry's own schema, or no
            params validation for a plain mapping.
        middleware: Lifecycle callbacks.
    """

    def __init__(
        self,
        methods: Mapping[str, Handler],
        validator: ParamsValidator | JSON | None = None,
        middleware: LoggerMiddleware | None = None,
    ) -> None:
        self._methods = methods
        if validator is None:
            if isinstance(methods, MethodRegistry):
                validator = ParamsValidator(methods.arguments_schema())
            else:
                validator = ParamsValidator.permissive()
        elif not isinstance(validator, ParamsValidator):
            validator = ParamsValidator(validator)
        self._validator = validator
        self._middleware = middleware or LoggerMiddleware()

    async def handle(self, body: Any) -> JSON:
        """Handle one request body and return its response envelope."""
        correlation_id = uuid.uuid4().hex[:12]
        middleware = self._middleware
        try:
            request = parse_rpc_request(body)
            method, params = request.method, request.params

            handler = self._methods.get(method)
            if handler is None:
                raise RequestFormatError(f"Method not found {method}", METHOD_NOT_FOUND)
            if middleware.on_call is not None:
                middleware.on_call(method, params)

            issues = self._validator.validate(method, params)
            if issues:
                raise RequestFormatError(format_errors(issues, method), INVALID_PARAMS)

            logger.debug("RPC request [%s] method=%s", correlation_id, method)
            result = handler(*params)
            if inspect.isawaitable(result):
                result = await result

            if middleware.on_success is not None:
                middleware.on_success(method, result, params)
            return envelope_result(result)

        except RequestFormatError as exc:
            # Client-side formatting problems, not reported as unexpected
            logger.warning(
                "RPC request error [%s] code=%d: %s",
                correlation_id,
                exc.code,
                exc.message,
            )
            return envelope_error(exc.code, exc.message)

        except Exception as exc:  # noqa: BLE001
            method, params = try_to_parse_rpc_request(body)
            logger.exception(
                "RPC internal error [%s] method=%s: %s", correlation_id, method, exc
            )
            self._report_error(method or UNKNOWN_METHOD, exc, params or [])
            return envelope_error(INTERNAL_ERROR, str(exc), format_traceback(exc))

    def _report_error(self, method: str, exc: BaseException, params: list[Any]) -> None:
        on_error = self._middleware.on_error
        if on_error is None:
            return
        try:
            on_error(method, exc, params)
        except Exception:
            logger.exception("RPC on_error callback failed for method=%s", method)


def get_rpc_handler(
    methods: Mapping[str, Handler],
    schema: ParamsValidator | JSON | None = None,
    middleware: LoggerMiddleware | None = None,
) -> Callable[[Any], Awaitable[JSON]]:
    """Given a set of method handlers, return a coroutine function that handles requests."""
    return RpcDispatcher(methods, schema, middleware).handle
