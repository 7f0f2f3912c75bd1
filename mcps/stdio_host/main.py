"""CLI entry point for the stdio host.

Usage:
  mcps-serve weather
  python -m mcps.stdio_host.main daily-hot

Reads settings once, builds the service registry once, then
answers newline-delimited JSON-RPC requests from stdin in
arrival order until EOF. Diagnostics go to stderr.
"""
from __future__ import annotations

import sys
from typing import TYPE_CHECKING

import click
from returns.result import Failure

from mcps.mcp_modules import io_ops
from mcps.mcp_modules.config import load_settings
from mcps.services import build_registry, list_service_names, load_service
from mcps.stdio_host.handler import handle_message
from mcps.stdio_host.io_ops import read_stdin_line, write_stdout_message
from mcps.stdio_host.protocol import (
    INTERNAL_ERROR,
    PARSE_ERROR,
    decode_line,
    make_error,
)

if TYPE_CHECKING:
    from mcps.mcp_modules.commands.registry import CommandRegistry
    from mcps.mcp_modules.types import ServiceSettings
    from mcps.services import ServiceDefinition


def serve(
    registry: CommandRegistry,
    service: ServiceDefinition,
    settings: ServiceSettings,
) -> int:
    """Process requests until EOF. Returns the number handled.

    One request at a time; each reply is written before the
    next line is read, so replies keep request order.
    """
    handled = 0
    while True:
        raw = read_stdin_line()
        if not raw:
            return handled
        try:
            request = decode_line(raw)
        except ValueError as exc:
            io_ops.write_stderr(f"mcps: {exc}\n")
            write_stdout_message(make_error(None, PARSE_ERROR, "Parse error"))
            continue
        if request is None:
            continue
        handled += 1
        try:
            response = handle_message(
                request,
                registry=registry,
                service=service,
                settings=settings,
            )
        except Exception as exc:  # noqa: BLE001
            io_ops.write_stderr(f"mcps: unexpected error: {exc}\n")
            response = make_error(
                request.get("id"), INTERNAL_ERROR, str(exc) or "Internal error",
            )
        if response is not None:
            write_stdout_message(response)


@click.command()
@click.argument(
    "service_name",
    type=click.Choice(list_service_names()),
)
def main(*, service_name: str) -> None:
    """Run one mcps service on stdio."""
    service = load_service(service_name)
    if service is None:  # pragma: no cover
        io_ops.write_stderr(f"Unknown service: {service_name}\n")
        sys.exit(1)

    settings_result = load_settings(io_ops.read_environment())
    if isinstance(settings_result, Failure):
        err = settings_result.failure()
        io_ops.write_stderr(f"Configuration error: {err.message}\n")
        sys.exit(1)
    settings = settings_result.unwrap()

    registry = build_registry(service)
    io_ops.write_stderr(f"Starting {service.name} MCP server...\n")
    io_ops.write_stderr(f"{service.name} MCP server running on stdio\n")
    serve(registry, service, settings)


if __name__ == "__main__":  # pragma: no cover
    main()
