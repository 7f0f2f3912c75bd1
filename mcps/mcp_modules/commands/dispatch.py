"""Command dispatch -- the single entry point for every invocation.

Resolves a command through the registry, validates the raw
arguments, invokes the handler and normalizes whatever comes
back into a ResponseEnvelope. Nothing raises past this
module: every path ends in a well-formed envelope.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from returns.io import IOFailure, IOResult, IOSuccess
from returns.result import Failure
from returns.unsafe import unsafe_perform_io

from mcps.mcp_modules import io_ops
from mcps.mcp_modules.commands.validation import validate_arguments
from mcps.mcp_modules.errors import PipelineError
from mcps.mcp_modules.types import (
    ResourceContext,
    ResponseEnvelope,
    ServiceSettings,
    ToolContext,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from mcps.mcp_modules.commands.registry import CommandRegistry
    from mcps.mcp_modules.commands.types import ResourceSpec
    from mcps.mcp_modules.types import HandlerOutput


def _fail(
    error: PipelineError,
    target: str,
) -> ResponseEnvelope:
    """Log a failure on stderr and fold it into an envelope."""
    io_ops.write_stderr(
        f"mcps: {target} failed: {error}\n",
    )
    return ResponseEnvelope.error(error.message)


def _invoke(
    call: Callable[[], IOResult[HandlerOutput, PipelineError]],
    target: str,
) -> ResponseEnvelope:
    """Run a handler and normalize its outcome.

    Success lines become text blocks, a handler-built envelope
    passes through unchanged, an IOFailure or an escaped
    exception becomes a single-block error envelope.
    """
    try:
        outcome = call()
    except Exception as exc:  # noqa: BLE001
        return _fail(
            PipelineError(
                step_name=target,
                error_type="UnknownError",
                message=str(exc) or "Unknown error",
                context={"exception": type(exc).__name__},
            ),
            target,
        )

    if isinstance(outcome, IOFailure):
        return _fail(unsafe_perform_io(outcome.failure()), target)

    if not isinstance(outcome, IOSuccess):
        return _fail(
            PipelineError(
                step_name=target,
                error_type="UnknownError",
                message="Unknown error",
                context={"returned": type(outcome).__name__},
            ),
            target,
        )

    payload = unsafe_perform_io(outcome.unwrap())
    if isinstance(payload, ResponseEnvelope):
        if payload.is_error:
            io_ops.write_stderr(
                f"mcps: {target} failed: {' '.join(payload.texts)}\n",
            )
        return payload
    return ResponseEnvelope.from_lines(str(line) for line in payload)


def run_command(
    registry: CommandRegistry,
    name: str,
    raw_args: object,
    settings: ServiceSettings | None = None,
) -> ResponseEnvelope:
    """Dispatch a tool command by name.

    Unknown names and invalid arguments produce error
    envelopes without touching the handler; validation always
    precedes invocation.
    """
    spec = registry.resolve(name)
    if spec is None:
        return _fail(
            PipelineError(
                step_name="commands.dispatch",
                error_type="UnknownCommandError",
                message=f"Unknown command '{name}'",
                context={
                    "command_name": name,
                    "available": sorted(registry.commands),
                },
            ),
            name,
        )

    validated = validate_arguments(spec.input_shape, raw_args)
    if isinstance(validated, Failure):
        return _fail(validated.failure(), name)

    ctx = ToolContext(
        args=validated.unwrap(),
        settings=settings or ServiceSettings(),
    )
    return _invoke(lambda: spec.handler(ctx), name)


def resource_not_found(uri: str) -> ResponseEnvelope:
    """Log and return the error envelope for an unmatched URI."""
    return _fail(
        PipelineError(
            step_name="commands.dispatch",
            error_type="UnknownResourceError",
            message=f"Unknown resource '{uri}'",
            context={"uri": uri},
        ),
        uri,
    )


def invoke_resource(
    spec: ResourceSpec,
    uri: str,
    params: Mapping[str, str],
    settings: ServiceSettings | None = None,
) -> ResponseEnvelope:
    """Invoke an already-resolved resource handler."""
    ctx = ResourceContext(
        uri=uri,
        params=params,
        settings=settings or ServiceSettings(),
    )
    return _invoke(lambda: spec.handler(ctx), spec.name)


def read_resource(
    registry: CommandRegistry,
    uri: str,
    settings: ServiceSettings | None = None,
) -> ResponseEnvelope:
    """Dispatch a resource read by URI.

    Same contract as run_command, with the URI in place of
    the command name and template placeholders in place of
    validated arguments.
    """
    resolved = registry.resolve_resource(uri)
    if resolved is None:
        return resource_not_found(uri)
    spec, params = resolved
    return invoke_resource(spec, uri, params, settings)
