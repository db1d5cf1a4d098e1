"""RPC types and method registry."""

from __future__ import annotations

from rpcenvelope.rpc.types import (
    JSON,
    RpcError,
    RequestFormatError,
    ResponseProtocolError,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    INVALID_PARAMS,
    INTERNAL_ERROR,
    envelope_error,
    envelope_result,
)

from rpcenvelope.rpc.router import (
    Handler,
    MethodRegistry,
    RouteConfigurationError,
)

__all__ = [
    # Types
    "JSON",
    "RpcError",
    "RequestFormatError",
    "ResponseProtocolError",
    # Error codes
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "INVALID_PARAMS",
    "INTERNAL_ERROR",
    # Utilities
    "envelope_error",
    "envelope_result",
    # Router
    "Handler",
    "MethodRegistry",
    "RouteConfigurationError",
]
