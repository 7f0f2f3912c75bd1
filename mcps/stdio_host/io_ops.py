"""I/O boundary for the stdio host.

All stdin/stdout access goes through here. Tests mock these
functions at this boundary.
"""
from __future__ import annotations

import sys
from typing import IO, Any

from mcps.stdio_host.protocol import encode_message


def _get_stdin_buffer() -> IO[bytes]:
    """Return stdin binary buffer. Mockable seam."""
    return sys.stdin.buffer


def _get_stdout_buffer() -> IO[bytes]:
    """Return stdout binary buffer. Mockable seam."""
    return sys.stdout.buffer


def read_stdin_line() -> bytes:
    """Read one framed message from stdin.

    Returns the raw line including its newline. Returns empty
    bytes on EOF.
    """
    return _get_stdin_buffer().readline()


def write_stdout_message(msg: dict[str, Any]) -> None:
    """Write one framed JSON message to stdout and flush."""
    stdout_buf = _get_stdout_buffer()
    stdout_buf.write(encode_message(msg))
    stdout_buf.flush()
