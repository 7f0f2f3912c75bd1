"""Argument validation against a command's input shape.

Pure functions: no I/O, no handler calls. Validation always
runs to completion before a handler is invoked.
"""
from __future__ import annotations

import math
from collections.abc import Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING

from returns.result import Failure, Result, Success

from mcps.mcp_modules.commands.types import FieldKind, FieldSpec
from mcps.mcp_modules.errors import PipelineError

if TYPE_CHECKING:
    from mcps.mcp_modules.types import ValidatedArgs


def _kind_matches(spec: FieldSpec, value: object) -> bool:
    """Strict kind check. No coercion is attempted."""
    if spec.kind is FieldKind.STRING:
        return isinstance(value, str)
    if spec.kind is FieldKind.BOOLEAN:
        return isinstance(value, bool)
    if spec.kind is FieldKind.ENUM:
        return isinstance(value, str) and value in spec.values
    # bool is an int subclass; it is never a number here
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and math.isnan(value):
        return False
    if spec.integral and not float(value).is_integer():
        return False
    if spec.minimum is not None and value < spec.minimum:
        return False
    return spec.maximum is None or value <= spec.maximum


def _invalid(field_name: str, spec: FieldSpec) -> PipelineError:
    return PipelineError(
        step_name="validate_arguments",
        error_type="ValidationError",
        message=(
            f"Invalid value for field '{field_name}':"
            f" expected {spec.expected()}"
        ),
        context={"field": field_name},
    )


def _missing(field_name: str) -> PipelineError:
    return PipelineError(
        step_name="validate_arguments",
        error_type="ValidationError",
        message=f"Missing required field '{field_name}'",
        context={"field": field_name},
    )


def validate_arguments(
    shape: Mapping[str, FieldSpec],
    raw_args: object,
) -> Result[ValidatedArgs, PipelineError]:
    """Validate raw_args against shape (pure function).

    Walks fields in declared order and fails on the first
    problem; errors are not aggregated. A null required field
    counts as missing; a null optional field is an invalid
    value, as an omitted key is the only way to leave it out.
    Omitted optional fields receive their default when one is
    declared. Undeclared keys are dropped.
    Returns Success(read-only mapping) or Failure(PipelineError).
    """
    if raw_args is None:
        raw_args = {}
    if not isinstance(raw_args, Mapping):
        return Failure(
            PipelineError(
                step_name="validate_arguments",
                error_type="ValidationError",
                message="Invalid arguments: expected an object",
                context={"type": type(raw_args).__name__},
            ),
        )

    validated: dict[str, object] = {}
    for field_name, spec in shape.items():
        value = raw_args.get(field_name)
        if value is None and spec.required:
            return Failure(_missing(field_name))
        if field_name not in raw_args:
            if spec.default is not None:
                validated[field_name] = spec.default
            continue
        if not _kind_matches(spec, value):
            return Failure(_invalid(field_name, spec))
        validated[field_name] = value
    return Success(MappingProxyType(validated))
