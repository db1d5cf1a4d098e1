"""Params validation against a shared arguments schema.

One JSON schema document describes the params of every method: it is an
object schema whose properties are keyed by method name, each holding the
array schema for that method's positional params. A request is validated by
wrapping its params as `{method: params}`.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from jsonschema import Draft7Validator

from .rpc.types import JSON

# Synthetic root name used when rendering data paths
DATA_VAR = "root_prop"

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


@dataclass(frozen=True)
class ValidationIssue:
    """A single schema violation."""

    data_path: str
    message: str


def _path_segment(part: Any) -> str:
    if isinstance(part, int):
        return f"[{part}]"
    key = str(part)
    if _IDENTIFIER_RE.match(key):
        return f".{key}"
    return f"[{key!r}]"


def data_path(parts: Iterable[Any]) -> str:
    """Render a jsonschema instance path rooted at `DATA_VAR`."""
    return DATA_VAR + "".join(_path_segment(part) for part in parts)


class ParamsValidator:
    """Compiled validator for a shared arguments schema."""

    def __init__(self, schema: JSON) -> None:
        Draft7Validator.check_schema(schema)
        self._validator = Draft7Validator(schema)

    @classmethod
    def permissive(cls) -> ParamsValidator:
        """A validator that accepts any params for any method."""
        return cls({})

    def validate(self, method: str, params: Sequence[Any]) -> list[ValidationIssue]:
        """Return every violation of `params` against the schema for `method`."""
        instance = {method: list(params)}
        return [
            ValidationIssue(data_path=data_path(error.absolute_path), message=error.message)
            for error in self._validator.iter_errors(instance)
        ]


def format_errors(issues: Sequence[ValidationIssue], method: str) -> str:
    """Summarize all issues, naming the params array `params`."""
    to_replace = data_path([method])
    errors_text = "\n".join(f"{issue.data_path} {issue.message}" for issue in issues)
    return "Validation error:\n" + errors_text.replace(to_replace, "params")
