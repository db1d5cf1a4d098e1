"""Single-call RPC envelopes: a server dispatcher and a client resolver."""

from __future__ import annotations

from rpcenvelope.client import parse_response, resolve_response
from rpcenvelope.middleware import logging_middleware
from rpcenvelope.models import RpcErrorObject, RpcRequest, RpcResponse
from rpcenvelope.rpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    MethodRegistry,
    RequestFormatError,
    ResponseProtocolError,
    RouteConfigurationError,
    RpcError,
)
from rpcenvelope.rpc_dispatcher import LoggerMiddleware, RpcDispatcher, get_rpc_handler
from rpcenvelope.rpc_validation import ParamsValidator, ValidationIssue, format_errors

__all__ = [
    "INTERNAL_ERROR",
    "INVALID_PARAMS",
    "INVALID_REQUEST",
    "METHOD_NOT_FOUND",
    "LoggerMiddleware",
    "MethodRegistry",
    "ParamsValidator",
    "RequestFormatError",
    "ResponseProtocolError",
    "RouteConfigurationError",
    "RpcDispatcher",
    "RpcError",
    "RpcErrorObject",
    "RpcRequest",
    "RpcResponse",
    "ValidationIssue",
    "format_errors",
    "get_rpc_handler",
    "logging_middleware",
    "parse_response",
    "resolve_response",
]
