"""Information resources built from process-local data.

Both are rebuilt on every read and make no external call.
"""
from __future__ import annotations

import json
from typing import TYPE_CHECKING

from returns.io import IOResult, IOSuccess

from mcps.mcp_modules import io_ops
from mcps.mcp_modules.commands.types import ResourceSpec

if TYPE_CHECKING:
    from mcps.mcp_modules.errors import PipelineError
    from mcps.mcp_modules.types import HandlerOutput, ResourceContext

SERVER_NAME = "mcp-service"
SERVER_VERSION = "1.0.0"
ADMIN_USERNAME = "admin"


def system_info(
    _ctx: ResourceContext,
) -> IOResult[HandlerOutput, PipelineError]:
    """Describe the running server. Cannot fail."""
    info = {
        **io_ops.platform_info(),
        "serverName": SERVER_NAME,
        "serverVersion": SERVER_VERSION,
        "timestamp": io_ops.utc_now_iso(),
    }
    return IOSuccess([json.dumps(info, indent=2)])


def user_info(
    ctx: ResourceContext,
) -> IOResult[HandlerOutput, PipelineError]:
    """Describe the user named in the URI."""
    username = ctx.params["username"]
    info = {
        "username": username,
        "accessLevel": (
            "administrator" if username == ADMIN_USERNAME else "user"
        ),
        "lastLogin": io_ops.utc_now_iso(),
    }
    return IOSuccess([json.dumps(info, indent=2)])


SYSTEM_INFO = ResourceSpec(
    name="system-info",
    uri_template="system://info",
    handler=system_info,
    description="Server platform and version information",
)

USER_INFO = ResourceSpec(
    name="user-info",
    uri_template="user://{username}/info",
    handler=user_info,
    description="Access level of a named user",
)
