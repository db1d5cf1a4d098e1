from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .rpc.types import INTERNAL_ERROR, JSON


class RpcRequest(BaseModel):
    method: str = Field(..., min_length=1, description="Registered method name.")
    params: list[Any] = Field(..., description="Positional handler arguments.")


class RpcErrorObject(BaseModel):
    model_config = ConfigDict(extra="ignore")

    code: int = INTERNAL_ERROR
    message: str = ""
    data: Any = Field(
        default=None, description="Diagnostic payload; conventionally a remote stack trace."
    )

    @field_validator("code", mode="before")
    @classmethod
    def _default_code(cls, value: Any) -> Any:
        return INTERNAL_ERROR if value is None else value

    @field_validator("message", mode="before")
    @classmethod
    def _default_message(cls, value: Any) -> Any:
        return "" if value is None else value


class RpcResponse(BaseModel):
    """Response envelope: `result` on success, `error` on failure."""

    model_config = ConfigDict(extra="ignore")

    result: Any = None
    error: RpcErrorObject | None = None

    @field_validator("error", mode="before")
    @classmethod
    def _coerce_string_error(cls, value: Any) -> Any:
        # Some servers send {"error": "message"}; an empty string is no error
        if isinstance(value, str):
            return {"message": value} if value else None
        return value

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def has_result(self) -> bool:
        return "result" in self.model_fields_set

    def to_envelope(self) -> JSON:
        if self.error is not None:
            return {"error": self.error.model_dump(exclude_none=True)}
        return {"result": self.result}
