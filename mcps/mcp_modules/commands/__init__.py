"""Commands package -- registry and invocation pipeline.

Public API for command infrastructure: field and command
types, the per-service registry, argument validation and
dispatch.
"""
from __future__ import annotations

from mcps.mcp_modules.commands.dispatch import (
    invoke_resource,
    read_resource,
    resource_not_found,
    run_command,
)
from mcps.mcp_modules.commands.registry import CommandRegistry
from mcps.mcp_modules.commands.types import (
    CommandSpec,
    FieldKind,
    FieldSpec,
    ResourceSpec,
)
from mcps.mcp_modules.commands.validation import validate_arguments

__all__ = [
    "CommandRegistry",
    "CommandSpec",
    "FieldKind",
    "FieldSpec",
    "ResourceSpec",
    "invoke_resource",
    "read_resource",
    "resource_not_found",
    "run_command",
    "validate_arguments",
]
