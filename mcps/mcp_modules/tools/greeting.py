"""Greeting and echo tools."""
from __future__ import annotations

from typing import TYPE_CHECKING

from returns.io import IOResult, IOSuccess

from mcps.mcp_modules.commands.types import CommandSpec, FieldKind, FieldSpec

if TYPE_CHECKING:
    from mcps.mcp_modules.errors import PipelineError
    from mcps.mcp_modules.types import HandlerOutput, ToolContext


def greet(
    ctx: ToolContext,
) -> IOResult[HandlerOutput, PipelineError]:
    """Generate a personalized greeting."""
    salutation = "Good day" if ctx.args.get("formal") else "Hello"
    return IOSuccess([f"{salutation}, {ctx.args['name']}!"])


def echo(
    ctx: ToolContext,
) -> IOResult[HandlerOutput, PipelineError]:
    """Echo the message back."""
    return IOSuccess([f"Echo: {ctx.args['message']}"])


GREETING = CommandSpec(
    name="greeting",
    description="Generate a personalized greeting",
    handler=greet,
    input_shape={
        "name": FieldSpec(
            kind=FieldKind.STRING,
            description="The name to greet",
        ),
        "formal": FieldSpec(
            kind=FieldKind.BOOLEAN,
            required=False,
            default=False,
            description="Whether to use formal greeting",
        ),
    },
)

ECHO = CommandSpec(
    name="echo",
    description="Echo back the provided message",
    handler=echo,
    input_shape={
        "message": FieldSpec(
            kind=FieldKind.STRING,
            description="The message to echo",
        ),
    },
)
