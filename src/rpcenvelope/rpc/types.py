"""RPC types and utilities.

Error codes, the error taxonomy shared by the server dispatcher and the
client resolver, and helpers that build response envelopes.
"""

from __future__ import annotations

import traceback
from typing import Any

# Type alias for JSON-serializable dict
JSON = dict[str, Any]

# Standard JSON-RPC error codes
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

_ABSENT: Any = object()


class RpcError(Exception):
    """RPC error with code, message, and optional data."""

    def __init__(
        self,
        code: int,
        message: str,
        data: Any = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> JSON:
        """Convert to an envelope error object."""
        result: JSON = {"code": self.code, "message": self.message}
        if self.data is not None:
            result["data"] = self.data
        return result


class RequestFormatError(RpcError):
    """The incoming request is malformed, names an unknown method, or has invalid params.

    These are client-originated protocol errors. They never carry diagnostic
    data and are not reported to the error-observation callback.
    """

    def __init__(self, message: str, code: int | None = None) -> None:
        super().__init__(code=code or INTERNAL_ERROR, message=message)


class ResponseProtocolError(RpcError):
    """Error rebuilt on the client side from a received error envelope.

    A string `data` is taken to be the remote stack trace. `stack` joins it
    with the stack at the point the error was built, remote first.
    """

    def __init__(self, code: int | None, message: str, data: Any = None) -> None:
        super().__init__(code=code or INTERNAL_ERROR, message=message, data=data)
        self.local_stack = "".join(traceback.format_stack()[:-1])
        self.remote_stack: str | None = data if isinstance(data, str) else None
        if self.remote_stack:
            self.add_note("Remote traceback:\n" + self.remote_stack.rstrip("\n"))

    @property
    def stack(self) -> str:
        if self.remote_stack is None:
            return self.local_stack
        return self.remote_stack + "\n" + self.local_stack


def envelope_result(result: Any) -> JSON:
    """Build a success envelope."""
    return {"result": result}


def envelope_error(code: int, message: str, data: Any = _ABSENT) -> JSON:
    """Build an error envelope; `data` is only included when supplied."""
    error: JSON = {"code": code, "message": message}
    if data is not _ABSENT:
        error["data"] = data
    return {"error": error}
