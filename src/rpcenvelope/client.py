"""Client-side resolution of response envelopes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .models import RpcResponse
from .rpc.types import INVALID_REQUEST, ResponseProtocolError
from .settings import settings


def parse_response(envelope: Mapping[str, Any] | RpcResponse) -> RpcResponse:
    """Validate a raw envelope, raising `ResponseProtocolError` if it is malformed."""
    if isinstance(envelope, RpcResponse):
        return envelope
    try:
        return RpcResponse.model_validate(envelope)
    except ValidationError as exc:
        raise ResponseProtocolError(
            INVALID_REQUEST, f"Malformed response envelope: {exc.error_count()} error(s)", None
        ) from exc


def resolve_response(
    envelope: Mapping[str, Any] | RpcResponse, *, strict: bool | None = None
) -> Any:
    """Return the envelope's result, or raise the error it carries.

    A string `data` on the error is treated as the remote stack trace and
    is prepended to the raised error's `stack`.

    An envelope with neither `result` nor `error` resolves to None, unless
    `strict` (default: `settings.strict_envelopes`) is set.
    """
    response = parse_response(envelope)
    if response.error is not None:
        error = response.error
        raise ResponseProtocolError(error.code, error.message, error.data)
    if strict is None:
        strict = settings.strict_envelopes
    if strict and not response.has_result:
        raise ResponseProtocolError(
            INVALID_REQUEST, "Response envelope has neither result nor error"
        )
    return response.result
