from __future__ import annotations

import pytest

from rpcenvelope.rpc.router import MethodRegistry, RouteConfigurationError

NUMBERS = {"type": "array", "items": {"type": "number"}}


class TestMethodRegistry:
    def test_register_and_has_method(self) -> None:
        registry = MethodRegistry()
        registry.register("test/method", lambda: {"ok": True})

        assert registry.has_method("test/method")
        assert not registry.has_method("unknown/method")
        assert "test/method" in registry
        assert len(registry) == 1

    def test_list_methods(self) -> None:
        registry = MethodRegistry()
        registry.register("b/method", lambda: {})
        registry.register("a/method", lambda: {})
        registry.register("c/method", lambda: {})

        assert registry.list_methods() == ["a/method", "b/method", "c/method"]

    def test_duplicate_registration_rejected(self) -> None:
        registry = MethodRegistry()
        registry.register("ping", lambda: "pong")

        with pytest.raises(ValueError, match="already registered: ping"):
            registry.register("ping", lambda: "pong")

    def test_decorator(self) -> None:
        registry = MethodRegistry()

        @registry.method("add", NUMBERS)
        async def add(a: float, b: float) -> float:
            return a + b

        assert registry["add"] is add
        assert registry.params_schema("add") == NUMBERS

    def test_arguments_schema(self) -> None:
        registry = MethodRegistry()
        registry.register("add", lambda a, b: a + b, NUMBERS)
        registry.register("ping", lambda: "pong")

        assert registry.arguments_schema() == {
            "type": "object",
            "properties": {"add": NUMBERS},
        }


class TestVerify:
    def test_complete_routes_pass(self) -> None:
        registry = MethodRegistry()
        registry.register("add", lambda a, b: a + b, NUMBERS)
        registry.register("ping", lambda: "pong", {"type": "array", "maxItems": 0})

        registry.verify()

    def test_missing_schema(self) -> None:
        registry = MethodRegistry()
        registry.register("add", lambda a, b: a + b, NUMBERS)
        registry.register("ping", lambda: "pong")

        with pytest.raises(RouteConfigurationError) as exc_info:
            registry.verify()

        assert exc_info.value.missing_schema == ["ping"]
        assert exc_info.value.missing_handler == []
        assert "ping" in str(exc_info.value)

    def test_missing_handler_in_external_schema(self) -> None:
        registry = MethodRegistry()
        registry.register("add", lambda a, b: a + b)
        schema = {"type": "object", "properties": {"add": NUMBERS, "sub": NUMBERS}}

        with pytest.raises(RouteConfigurationError) as exc_info:
            registry.verify(schema)

        assert exc_info.value.missing_handler == ["sub"]
        assert "schemas without a handler: sub" in str(exc_info.value)
