"""Classification of failed upstream calls into one user message.

Every handler that performs an outbound call routes its
failure through classify_upstream_failure, so all of them
report errors the same way. First match wins:

1. upstream answered with an error status (refined to a
   not-found DomainError when the handler's NotFoundRule
   matches)
2. upstream unreachable (transport failure)
3. domain not-found raised by the handler itself
4. anything else
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeVar

from pydantic import BaseModel, ValidationError
from returns.io import IOFailure, IOResult, IOSuccess

from mcps.mcp_modules.errors import PipelineError

if TYPE_CHECKING:
    from mcps.mcp_modules.types import HttpResponse

PayloadT = TypeVar("PayloadT", bound=BaseModel)

DEFAULT_DETAIL_FIELDS: tuple[str, ...] = ("error", "message", "status")


@dataclass(frozen=True)
class NotFoundRule:
    """Marks which error responses mean "input not found".

    Matches on the HTTP status and, when error_code is set,
    on the upstream's own error code (body["error"]["code"]).
    """

    message: str
    status_code: int = 404
    error_code: int | None = None

    def matches(self, status_code: object, body: object) -> bool:
        """True when the failed response is a not-found answer."""
        if status_code != self.status_code:
            return False
        if self.error_code is None:
            return True
        if not isinstance(body, dict):
            return False
        error = body.get("error")
        return isinstance(error, dict) and error.get("code") == self.error_code


def not_found_error(message: str, *, step_name: str) -> PipelineError:
    """Build a DomainError for an input the upstream could not resolve."""
    return PipelineError(
        step_name=step_name,
        error_type="DomainError",
        message=message,
        context={"reason": "not_found"},
    )


def _detail_from_body(
    body: object,
    fields: tuple[str, ...],
) -> str | None:
    """Pick the upstream's own error description, if any."""
    if not isinstance(body, dict):
        return None
    for name in fields:
        value = body.get(name)
        if isinstance(value, dict):
            value = value.get("message")
        if value is None or value == "":
            continue
        if isinstance(value, (str, int, float)):
            return str(value)
    return None


def classify_upstream_failure(
    error: PipelineError,
    *,
    label: str,
    not_found: NotFoundRule | None = None,
    detail_fields: tuple[str, ...] = DEFAULT_DETAIL_FIELDS,
) -> PipelineError:
    """Turn a failed upstream call into exactly one user-facing error.

    label prefixes every message except not-found ones, e.g.
    "Error fetching weather data". The returned error's
    message is the text the caller sees.
    """
    step_name = f"classify_upstream_failure[{error.step_name}]"

    if error.error_type == "UpstreamApplicationError":
        status_code = error.context.get("status_code")
        body = error.context.get("body")
        if not_found is not None and not_found.matches(status_code, body):
            return not_found_error(not_found.message, step_name=step_name)
        detail = _detail_from_body(body, detail_fields) or (
            f"Request failed with status code {status_code}"
        )
        return PipelineError(
            step_name=step_name,
            error_type="UpstreamApplicationError",
            message=f"{label}: {detail}",
            context={"status_code": status_code},
        )

    if error.error_type == "UpstreamTransportError":
        return PipelineError(
            step_name=step_name,
            error_type="UpstreamTransportError",
            message=f"{label}: {error.message}",
            context=dict(error.context),
        )

    if error.error_type == "DomainError":
        return error

    return PipelineError(
        step_name=step_name,
        error_type="UnknownError",
        message=f"{label}: {error.message or 'Unknown error'}",
        context={"original_type": error.error_type},
    )


def parse_payload(
    model: type[PayloadT],
    response: HttpResponse,
    *,
    step_name: str,
) -> IOResult[PayloadT, PipelineError]:
    """Validate an upstream JSON body against a pydantic model.

    A shape mismatch becomes a PayloadShapeError, which the
    classifier reports as an unclassified failure.
    """
    try:
        return IOSuccess(model.model_validate(response.payload))
    except ValidationError as exc:
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "body"
        return IOFailure(
            PipelineError(
                step_name=step_name,
                error_type="PayloadShapeError",
                message=(
                    f"Unexpected upstream payload at"
                    f" '{location}': {first['msg']}"
                ),
                context={"url": response.url},
            ),
        )
