"""RPC method registry.

Maps method names to handler functions, and keeps the per-method params
schema used to build the shared arguments schema document.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from rpcenvelope.rpc.types import JSON

logger = logging.getLogger(__name__)

# Handlers take positional params and return a value, or an awaitable of one.
Handler = Callable[..., Any]


class RouteConfigurationError(Exception):
    """Handlers and params schemas do not describe the same set of methods."""

    def __init__(self, missing_schema: list[str], missing_handler: list[str]) -> None:
        parts = []
        if missing_schema:
            parts.append(f"methods without a params schema: {', '.join(missing_schema)}")
        if missing_handler:
            parts.append(f"schemas without a handler: {', '.join(missing_handler)}")
        super().__init__("; ".join(parts))
        self.missing_schema = missing_schema
        self.missing_handler = missing_handler


class MethodRegistry(Mapping[str, Handler]):
    """Registry of RPC methods.

    Behaves as a read-only mapping from method name to handler, so it can be
    passed anywhere a plain dict of handlers is accepted.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}
        self._schemas: dict[str, JSON] = {}

    def __getitem__(self, name: str) -> Handler:
        return self._handlers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def register(
        self,
        name: str,
        handler: Handler,
        params_schema: JSON | None = None,
    ) -> None:
        """Register an RPC method.

        Args:
            name: The method name (e.g., "add").
            handler: Called with the request params spread positionally.
            params_schema: JSON schema for the params array. Methods without
                one accept any params.
        """
        if name in self._handlers:
            raise ValueError(f"Method already registered: {name}")
        self._handlers[name] = handler
        if params_schema is not None:
            self._schemas[name] = params_schema
        logger.debug("Registered RPC method %s", name)

    def method(
        self, name: str, params_schema: JSON | None = None
    ) -> Callable[[Handler], Handler]:
        """Decorator form of `register`.

        Usage:
            @registry.method("add", {"type": "array", "items": {"type": "number"}})
            async def add(a: float, b: float) -> float:
                return a + b
        """

        def decorator(func: Handler) -> Handler:
            self.register(name, func, params_schema)
            return func

        return decorator

    def has_method(self, name: str) -> bool:
        return name in self._handlers

    def list_methods(self) -> list[str]:
        """List all registered method names."""
        return sorted(self._handlers)

    def params_schema(self, name: str) -> JSON | None:
        return self._schemas.get(name)

    def arguments_schema(self) -> JSON:
        """Shared schema document with one params schema per method name."""
        return {
            "type": "object",
            "properties": {name: dict(schema) for name, schema in self._schemas.items()},
        }

    def verify(self, schema: JSON | None = None) -> None:
        """Check that every method has a params schema and every schema a handler.

        `schema` defaults to this registry's own arguments schema.
        """
        document = self.arguments_schema() if schema is None else schema
        declared = set(document.get("properties", {}))
        handled = set(self._handlers)
        missing_schema = sorted(handled - declared)
        missing_handler = sorted(declared - handled)
        if missing_schema or missing_handler:
            raise RouteConfigurationError(missing_schema, missing_handler)
