"""JSON-RPC request handler for the stdio host.

Maps protocol methods onto the invocation pipeline and
returns the response dict, or None for notifications.
Tool-level failures are answered with an isError envelope,
never with a JSON-RPC error.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from mcps.mcp_modules.commands.dispatch import (
    invoke_resource,
    resource_not_found,
    run_command,
)
from mcps.stdio_host.protocol import (
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    RESOURCE_NOT_FOUND,
    make_error,
    make_result,
)

if TYPE_CHECKING:
    from mcps.mcp_modules.commands.registry import CommandRegistry
    from mcps.mcp_modules.types import ServiceSettings
    from mcps.services import ServiceDefinition

PROTOCOL_VERSION = "2024-11-05"


def handle_message(
    request: dict[str, Any],
    *,
    registry: CommandRegistry,
    service: ServiceDefinition,
    settings: ServiceSettings,
) -> dict[str, Any] | None:
    """Handle one JSON-RPC message.

    Dispatches on the 'method' field. Messages without an
    'id' are notifications and get no reply.
    """
    method = request.get("method")
    request_id = request.get("id")
    is_notification = "id" not in request
    if not isinstance(method, str) or not method:
        if is_notification:
            return None
        return make_error(
            request_id, INVALID_REQUEST, "Missing 'method' field in request",
        )
    if is_notification:
        return None

    params = request.get("params") or {}
    if not isinstance(params, dict):
        return make_error(
            request_id, INVALID_PARAMS, "'params' must be an object",
        )

    if method == "initialize":
        return make_result(request_id, _initialize(service))
    if method == "ping":
        return make_result(request_id, {})
    if method == "tools/list":
        return make_result(request_id, _list_tools(registry))
    if method == "tools/call":
        return _call_tool(request_id, params, registry, settings)
    if method == "resources/list":
        return make_result(request_id, _list_resources(registry))
    if method == "resources/templates/list":
        return make_result(request_id, _list_resource_templates(registry))
    if method == "resources/read":
        return _read_resource(request_id, params, registry, settings)
    return make_error(
        request_id, METHOD_NOT_FOUND, f"Method not found: {method}",
    )


def _initialize(service: ServiceDefinition) -> dict[str, Any]:
    return {
        "protocolVersion": PROTOCOL_VERSION,
        "capabilities": {"tools": {}, "resources": {}},
        "serverInfo": {"name": service.name, "version": service.version},
    }


def _list_tools(registry: CommandRegistry) -> dict[str, Any]:
    return {
        "tools": [
            {
                "name": spec.name,
                "description": spec.description,
                "inputSchema": spec.input_schema(),
            }
            for spec in registry.list_commands()
        ],
    }


def _list_resources(registry: CommandRegistry) -> dict[str, Any]:
    return {
        "resources": [
            {
                "uri": spec.uri_template,
                "name": spec.name,
                "description": spec.description,
                "mimeType": spec.mime_type,
            }
            for spec in registry.list_resources()
        ],
    }


def _list_resource_templates(registry: CommandRegistry) -> dict[str, Any]:
    return {
        "resourceTemplates": [
            {
                "uriTemplate": spec.uri_template,
                "name": spec.name,
                "description": spec.description,
                "mimeType": spec.mime_type,
            }
            for spec in registry.list_resource_templates()
        ],
    }


def _call_tool(
    request_id: object,
    params: dict[str, Any],
    registry: CommandRegistry,
    settings: ServiceSettings,
) -> dict[str, Any]:
    """Run a tool through the pipeline and wrap its envelope."""
    name = params.get("name")
    if not isinstance(name, str) or not name:
        return make_error(
            request_id, INVALID_PARAMS, "Missing 'name' in tools/call params",
        )
    envelope = run_command(
        registry, name, params.get("arguments"), settings,
    )
    return make_result(request_id, envelope.to_dict())


def _read_resource(
    request_id: object,
    params: dict[str, Any],
    registry: CommandRegistry,
    settings: ServiceSettings,
) -> dict[str, Any]:
    """Read a resource; an error envelope becomes a JSON-RPC error."""
    uri = params.get("uri")
    if not isinstance(uri, str) or not uri:
        return make_error(
            request_id, INVALID_PARAMS, "Missing 'uri' in resources/read params",
        )
    resolved = registry.resolve_resource(uri)
    if resolved is None:
        envelope = resource_not_found(uri)
        return make_error(
            request_id, RESOURCE_NOT_FOUND, " ".join(envelope.texts),
        )
    spec, path_params = resolved
    envelope = invoke_resource(spec, uri, path_params, settings)
    if envelope.is_error:
        return make_error(
            request_id, RESOURCE_NOT_FOUND, " ".join(envelope.texts),
        )
    return make_result(
        request_id,
        {
            "contents": [
                {"uri": uri, "mimeType": spec.mime_type, "text": text}
                for text in envelope.texts
            ],
        },
    )
