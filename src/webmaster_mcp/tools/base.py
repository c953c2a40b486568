"""Tool data types and the shared argument validator.

Each tool declares its inputs as a table of :class:`ParamSpec` values.
One routine, :func:`validate_arguments`, checks and coerces caller
arguments against any such table.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal

from webmaster_mcp.core.errors import ParameterError, RequiredFieldError

if TYPE_CHECKING:
    from collections.abc import Mapping

ParamType = Literal["string", "integer"]


@dataclass(frozen=True, slots=True)
class ParamSpec:
    """Declared shape of one tool parameter."""

    type: ParamType = "string"
    required: bool = True
    description: str = ""
    choices: tuple[str, ...] | None = None

    def to_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if self.choices:
            schema["enum"] = list(self.choices)
        return schema


@dataclass(frozen=True, slots=True)
class ToolSpec:
    """Static description of a tool: name, docs and parameter table."""

    name: str
    title: str
    description: str
    params: dict[str, ParamSpec] = field(default_factory=dict)

    @property
    def read_only(self) -> bool:
        return self.name.startswith("get_")

    @property
    def destructive(self) -> bool:
        return self.name.startswith("delete_")

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's parameters."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {name: p.to_schema() for name, p in self.params.items()},
        }
        required = [name for name, p in self.params.items() if p.required]
        if required:
            schema["required"] = required
        return schema


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Schema definition for a tool, suitable for the host protocol."""

    name: str
    title: str
    description: str
    input_schema: dict[str, Any]
    read_only: bool = False
    destructive: bool = False


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _coerce_string(name: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    msg = f"{name} must be a string"
    raise ParameterError(msg)


def _coerce_integer(name: str, value: Any) -> int:
    msg = f"{name} must be an integer"
    if isinstance(value, bool):
        raise ParameterError(msg)
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ParameterError(msg) from None
    raise ParameterError(msg)


def validate_arguments(
    params: Mapping[str, ParamSpec],
    arguments: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Validate and coerce *arguments* against a parameter table.

    Unknown keys are dropped and absent optional parameters are omitted,
    so the result can be splatted straight into a client method.

    Raises:
        RequiredFieldError: A required parameter is missing or blank.
        ParameterError: A value has the wrong type or is not an allowed choice.
    """
    arguments = arguments or {}
    validated: dict[str, Any] = {}

    for name, spec in params.items():
        value = arguments.get(name)
        if _is_blank(value):
            if spec.required:
                raise RequiredFieldError(name)
            continue

        if spec.type == "integer":
            value = _coerce_integer(name, value)
        else:
            value = _coerce_string(name, value)

        if spec.choices is not None and value not in spec.choices:
            msg = f"{name} must be one of: {', '.join(spec.choices)}"
            raise ParameterError(msg)

        validated[name] = value

    return validated
