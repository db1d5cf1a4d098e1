from __future__ import annotations

from collections.abc import Iterator
from typing import Any

import pytest

from rpcenvelope.errors import clear_recent_errors
from rpcenvelope.rpc.router import MethodRegistry
from rpcenvelope.rpc_dispatcher import LoggerMiddleware


class RecordingMiddleware:
    """Collects lifecycle callback invocations."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[Any]]] = []
        self.successes: list[tuple[str, Any, list[Any]]] = []
        self.errors: list[tuple[str, BaseException, list[Any]]] = []

    def on_call(self, method: str, params: list[Any]) -> None:
        self.calls.append((method, params))

    def on_success(self, method: str, result: Any, params: list[Any]) -> None:
        self.successes.append((method, result, params))

    def on_error(self, method: str, exc: BaseException, params: list[Any]) -> None:
        self.errors.append((method, exc, params))

    def as_middleware(self) -> LoggerMiddleware:
        return LoggerMiddleware(
            on_call=self.on_call,
            on_success=self.on_success,
            on_error=self.on_error,
        )


@pytest.fixture
def recorder() -> RecordingMiddleware:
    return RecordingMiddleware()


@pytest.fixture
def registry() -> MethodRegistry:
    """Registry with ping (unconstrained), add (two numbers) and boom (raises)."""

    reg = MethodRegistry()

    async def ping() -> str:
        return "pong"

    async def add(a: float, b: float) -> float:
        return a + b

    async def boom() -> None:
        raise RuntimeError("kaboom")

    reg.register("ping", ping)
    reg.register(
        "add",
        add,
        {
            "type": "array",
            "items": {"type": "number"},
            "minItems": 2,
            "maxItems": 2,
        },
    )
    reg.register("boom", boom)
    return reg


@pytest.fixture(autouse=True)
def _reset_error_dedupe() -> Iterator[None]:
    clear_recent_errors()
    yield
    clear_recent_errors()
