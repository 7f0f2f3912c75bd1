"""I/O boundary module -- ALL external I/O goes through here.

This is the single mock point for the test suite. Handlers
never import httpx, os.environ or sys directly; they call
io_ops functions.
"""
from __future__ import annotations

import os
import platform
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING

import httpx
from returns.io import IOFailure, IOResult, IOSuccess

from mcps.mcp_modules.errors import PipelineError
from mcps.mcp_modules.types import HttpResponse

if TYPE_CHECKING:
    from collections.abc import Mapping


def _response_body(response: httpx.Response) -> object:
    """Return the parsed JSON body, or raw text if not JSON.

    ValueError covers both malformed JSON and bytes that are
    not valid UTF-8; response.text decodes with replacement.
    """
    try:
        return response.json()
    except ValueError:
        return response.text


def http_get(
    url: str,
    *,
    params: Mapping[str, str | int] | None = None,
    timeout: float,
) -> IOResult[HttpResponse, PipelineError]:
    """Issue exactly one GET. Returns IOResult, never raises.

    Non-2xx responses become UpstreamApplicationError with the
    status code and body in context. Network-level failures
    (timeout, DNS, refused connection) become
    UpstreamTransportError. No retries.
    """
    try:
        response = httpx.get(url, params=params, timeout=timeout)
    except httpx.RequestError as exc:
        return IOFailure(
            PipelineError(
                step_name="io_ops.http_get",
                error_type="UpstreamTransportError",
                message=str(exc) or type(exc).__name__,
                context={"url": url, "exception": type(exc).__name__},
            ),
        )

    if not response.is_success:
        return IOFailure(
            PipelineError(
                step_name="io_ops.http_get",
                error_type="UpstreamApplicationError",
                message=(
                    "Request failed with status code"
                    f" {response.status_code}"
                ),
                context={
                    "url": url,
                    "status_code": response.status_code,
                    "body": _response_body(response),
                },
            ),
        )

    try:
        payload = response.json()
    except ValueError as exc:
        return IOFailure(
            PipelineError(
                step_name="io_ops.http_get",
                error_type="PayloadShapeError",
                message=f"Upstream returned invalid JSON: {exc}",
                context={"url": url, "status_code": response.status_code},
            ),
        )
    return IOSuccess(
        HttpResponse(
            status_code=response.status_code,
            url=str(response.url),
            payload=payload,
        ),
    )


def read_environment() -> dict[str, str]:
    """Snapshot the process environment. Mockable seam."""
    return dict(os.environ)


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601. Mockable seam."""
    return datetime.now(tz=UTC).isoformat()


def platform_info() -> dict[str, str]:
    """Describe the running interpreter and OS. Mockable seam."""
    return {
        "platform": sys.platform,
        "pythonVersion": platform.python_version(),
    }


def write_stderr(
    message: str,
) -> IOResult[None, PipelineError]:
    """Write message to stderr (fail-open logging).

    stdout is reserved for protocol frames, so every
    diagnostic goes here. Returns IOSuccess(None) or
    IOFailure on error.
    """
    try:
        sys.stderr.write(message)
        sys.stderr.flush()
    except OSError as exc:
        return IOFailure(
            PipelineError(
                step_name="io_ops.write_stderr",
                error_type="StderrWriteError",
                message=(
                    f"Failed to write to stderr: {exc}"
                ),
                context={
                    "original_message": message,
                },
            ),
        )
    return IOSuccess(None)
