"""Command and resource type definitions for the registry."""
from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from mcps.mcp_modules.formatting import format_number

if TYPE_CHECKING:
    from returns.io import IOResult

    from mcps.mcp_modules.errors import PipelineError
    from mcps.mcp_modules.types import (
        HandlerOutput,
        ResourceContext,
        ToolContext,
    )

ToolHandler = Callable[
    ["ToolContext"],
    "IOResult[HandlerOutput, PipelineError]",
]

ResourceHandler = Callable[
    ["ResourceContext"],
    "IOResult[HandlerOutput, PipelineError]",
]

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class FieldKind(Enum):
    """Closed set of argument kinds a field may declare."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"


@dataclass(frozen=True)
class FieldSpec:
    """Constraint for one field of a command's input shape.

    default=None means the field has no default. values is
    only meaningful for ENUM fields; minimum/maximum (inclusive)
    and integral only for NUMBER fields.
    """

    kind: FieldKind
    description: str = ""
    required: bool = True
    default: object = None
    values: tuple[str, ...] = ()
    minimum: float | None = None
    maximum: float | None = None
    integral: bool = False

    def expected(self) -> str:
        """Describe the accepted values for error messages."""
        if self.kind is FieldKind.ENUM:
            return "one of: " + ", ".join(self.values)
        if self.kind is not FieldKind.NUMBER:
            return self.kind.value
        noun = "integer" if self.integral else "number"
        low, high = self.minimum, self.maximum
        if low is not None and high is not None:
            return (
                f"{noun} between {format_number(low)}"
                f" and {format_number(high)}"
            )
        if low is not None:
            return f"{noun} >= {format_number(low)}"
        if high is not None:
            return f"{noun} <= {format_number(high)}"
        return noun

    def json_schema(self) -> dict[str, object]:
        """Return the JSON Schema fragment for this field."""
        schema: dict[str, object]
        if self.kind is FieldKind.ENUM:
            schema = {"type": "string", "enum": list(self.values)}
        elif self.kind is FieldKind.NUMBER and self.integral:
            schema = {"type": "integer"}
        else:
            schema = {"type": self.kind.value}
        if self.minimum is not None:
            schema["minimum"] = self.minimum
        if self.maximum is not None:
            schema["maximum"] = self.maximum
        if self.default is not None:
            schema["default"] = self.default
        if self.description:
            schema["description"] = self.description
        return schema


@dataclass(frozen=True)
class CommandSpec:
    """Metadata for a registered tool command.

    input_shape is ordered: validation walks the fields in
    declaration order and reports only the first problem.
    """

    name: str
    description: str
    handler: ToolHandler
    input_shape: Mapping[str, FieldSpec] = field(default_factory=dict)

    def input_schema(self) -> dict[str, object]:
        """Render the input shape as a JSON Schema object."""
        return {
            "type": "object",
            "properties": {
                name: spec.json_schema()
                for name, spec in self.input_shape.items()
            },
            "required": [
                name
                for name, spec in self.input_shape.items()
                if spec.required
            ],
        }


@dataclass(frozen=True)
class ResourceSpec:
    """Metadata for a registered resource.

    A uri_template without {param} placeholders is a static
    resource. Each placeholder matches one non-empty path
    segment.
    """

    name: str
    uri_template: str
    handler: ResourceHandler
    description: str = ""
    mime_type: str = "application/json"

    @property
    def is_template(self) -> bool:
        """True when the URI carries placeholders."""
        return _PLACEHOLDER.search(self.uri_template) is not None

    def match(self, uri: str) -> dict[str, str] | None:
        """Return placeholder values if uri matches, else None."""
        if not self.is_template:
            return {} if uri == self.uri_template else None
        pattern = ""
        last = 0
        for placeholder in _PLACEHOLDER.finditer(self.uri_template):
            pattern += re.escape(
                self.uri_template[last:placeholder.start()],
            )
            pattern += f"(?P<{placeholder.group(1)}>[^/]+)"
            last = placeholder.end()
        pattern += re.escape(self.uri_template[last:])
        found = re.fullmatch(pattern, uri)
        if found is None:
            return None
        return found.groupdict()
