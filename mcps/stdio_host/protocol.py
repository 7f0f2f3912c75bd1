"""JSON-RPC 2.0 framing for the stdio transport.

One JSON object per line in each direction. Framing only:
method semantics live in handler.py.
"""
from __future__ import annotations

import json
from typing import Any

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
RESOURCE_NOT_FOUND = -32002


def encode_message(msg: dict[str, Any]) -> bytes:
    """Encode a dict as a newline-terminated UTF-8 JSON line."""
    return (json.dumps(msg, ensure_ascii=False) + "\n").encode("utf-8")


def decode_line(
    raw: bytes | str,
) -> dict[str, Any] | None:
    """Decode one framed message.

    Returns the parsed dict, or None for a blank line.
    Raises ValueError if the line is not a JSON object.
    """
    text = raw.decode("utf-8") if isinstance(raw, bytes) else raw
    if not text.strip():
        return None
    try:
        result = json.loads(text)
    except json.JSONDecodeError as exc:
        msg = f"Invalid JSON in message: {exc}"
        raise ValueError(msg) from exc
    if not isinstance(result, dict):
        msg = f"Expected a JSON object, got {type(result).__name__}"
        raise ValueError(msg)  # noqa: TRY004
    return result


def make_result(
    request_id: object,
    result: dict[str, Any],
) -> dict[str, Any]:
    """Build a JSON-RPC success response."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def make_error(
    request_id: object,
    code: int,
    message: str,
) -> dict[str, Any]:
    """Build a JSON-RPC error response."""
    return {
        "jsonrpc": JSONRPC_VERSION,
        "id": request_id,
        "error": {"code": code, "message": message},
    }
