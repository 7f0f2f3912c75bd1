"""Basic arithmetic tool (pure computation, never suspends)."""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, cast

from returns.io import IOResult, IOSuccess

from mcps.mcp_modules.commands.types import CommandSpec, FieldKind, FieldSpec
from mcps.mcp_modules.formatting import format_number
from mcps.mcp_modules.types import ResponseEnvelope

if TYPE_CHECKING:
    from mcps.mcp_modules.errors import PipelineError
    from mcps.mcp_modules.types import HandlerOutput, ToolContext


class ArithmeticOperation(Enum):
    """Closed set of supported operations."""

    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"


OPERATION_SYMBOLS: MappingProxyType[ArithmeticOperation, str] = (
    MappingProxyType(
        {
            ArithmeticOperation.ADD: "+",
            ArithmeticOperation.SUBTRACT: "-",
            ArithmeticOperation.MULTIPLY: "×",
            ArithmeticOperation.DIVIDE: "÷",
        }
    )
)

DIVISION_BY_ZERO_MESSAGE = "Error: Division by zero is not allowed."


def calculate(
    ctx: ToolContext,
) -> IOResult[HandlerOutput, PipelineError]:
    """Apply the requested operation to a and b.

    Division by zero is reported as a handler-built error
    envelope rather than a pipeline failure.
    """
    operation = ArithmeticOperation(ctx.args["operation"])
    a = cast("float", ctx.args["a"])
    b = cast("float", ctx.args["b"])

    if operation is ArithmeticOperation.ADD:
        result = a + b
    elif operation is ArithmeticOperation.SUBTRACT:
        result = a - b
    elif operation is ArithmeticOperation.MULTIPLY:
        result = a * b
    else:
        if b == 0:
            return IOSuccess(
                ResponseEnvelope.error(DIVISION_BY_ZERO_MESSAGE),
            )
        result = a / b

    symbol = OPERATION_SYMBOLS[operation]
    return IOSuccess(
        [
            f"{format_number(a)} {symbol} {format_number(b)}"
            f" = {format_number(result)}",
        ],
    )


CALCULATE = CommandSpec(
    name="calculate",
    description="Perform basic arithmetic operations",
    handler=calculate,
    input_shape={
        "operation": FieldSpec(
            kind=FieldKind.ENUM,
            values=tuple(op.value for op in ArithmeticOperation),
            description="The arithmetic operation to perform",
        ),
        "a": FieldSpec(kind=FieldKind.NUMBER, description="First number"),
        "b": FieldSpec(kind=FieldKind.NUMBER, description="Second number"),
    },
)
