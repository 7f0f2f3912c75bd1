"""Tests for the command registry."""
from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

import pytest
from returns.io import IOSuccess

from mcps.mcp_modules.commands.registry import CommandRegistry
from mcps.mcp_modules.commands.types import CommandSpec, ResourceSpec
from mcps.mcp_modules.errors import DuplicateCommandError, RegistryFrozenError

if TYPE_CHECKING:
    from returns.io import IOResult

    from mcps.mcp_modules.errors import PipelineError
    from mcps.mcp_modules.types import HandlerOutput, ResourceContext


def _resource_handler(
    _ctx: ResourceContext,
) -> IOResult[HandlerOutput, PipelineError]:
    return IOSuccess(["{}"])


def _resource(name: str, uri: str) -> ResourceSpec:
    return ResourceSpec(name=name, uri_template=uri, handler=_resource_handler)


# --- register / resolve tests ---


def test_resolve_returns_registered_spec(sample_spec: CommandSpec) -> None:
    """resolve returns the exact spec that was registered."""
    registry = CommandRegistry()
    registry.register(sample_spec)
    assert registry.resolve("sample") is sample_spec


def test_resolve_is_idempotent(sample_registry: CommandRegistry) -> None:
    """Resolving twice yields the identical CommandSpec."""
    first = sample_registry.resolve("sample")
    second = sample_registry.resolve("sample")
    assert first is not None
    assert first is second
    assert first == second


def test_resolve_unknown_returns_none(
    sample_registry: CommandRegistry,
) -> None:
    """resolve returns None for unregistered commands."""
    assert sample_registry.resolve("nonexistent") is None


def test_resolve_does_not_invoke_handler(
    sample_registry: CommandRegistry,
    recording_handler: object,
) -> None:
    """Lookup is pure: the handler is never called."""
    sample_registry.resolve("sample")
    assert recording_handler.calls == []  # type: ignore[attr-defined]


def test_register_duplicate_name_raises(sample_spec: CommandSpec) -> None:
    """Re-registration under an existing name is a programming error."""
    registry = CommandRegistry()
    registry.register(sample_spec)
    with pytest.raises(DuplicateCommandError, match="sample"):
        registry.register(sample_spec)


def test_register_after_freeze_raises(
    sample_registry: CommandRegistry,
    sample_spec: CommandSpec,
) -> None:
    """No registration is accepted once the init phase ended."""
    other = CommandSpec(
        name="other", description="x", handler=sample_spec.handler,
    )
    with pytest.raises(RegistryFrozenError):
        sample_registry.register(other)
    with pytest.raises(RegistryFrozenError):
        sample_registry.register_resource(_resource("r", "r://x"))


def test_freeze_returns_self() -> None:
    """freeze() chains and flips the frozen flag."""
    registry = CommandRegistry()
    assert registry.frozen is False
    assert registry.freeze() is registry
    assert registry.frozen is True


def test_commands_view_is_read_only(
    sample_registry: CommandRegistry,
    sample_spec: CommandSpec,
) -> None:
    """commands is a MappingProxyType -- mutation blocked."""
    view = sample_registry.commands
    assert isinstance(view, MappingProxyType)
    with pytest.raises(TypeError):
        view["evil"] = sample_spec  # type: ignore[index]


def test_list_commands_keeps_registration_order(
    sample_spec: CommandSpec,
) -> None:
    """list_commands returns specs in registration order."""
    registry = CommandRegistry()
    second = CommandSpec(
        name="alpha", description="x", handler=sample_spec.handler,
    )
    registry.register(sample_spec)
    registry.register(second)
    assert [s.name for s in registry.list_commands()] == ["sample", "alpha"]


# --- resource tests ---


def test_resolve_static_resource() -> None:
    """A static URI resolves with no parameters."""
    registry = CommandRegistry()
    spec = _resource("system-info", "system://info")
    registry.register_resource(spec)
    assert registry.resolve_resource("system://info") == (spec, {})


def test_resolve_resource_template_extracts_params() -> None:
    """Template placeholders become resolved parameters."""
    registry = CommandRegistry()
    spec = _resource("user-info", "user://{username}/info")
    registry.register_resource(spec)
    resolved = registry.resolve_resource("user://alice/info")
    assert resolved == (spec, {"username": "alice"})


def test_resolve_resource_unknown_returns_none() -> None:
    """Non-matching URIs resolve to None."""
    registry = CommandRegistry()
    registry.register_resource(_resource("user-info", "user://{username}/info"))
    assert registry.resolve_resource("user:///info") is None
    assert registry.resolve_resource("user://a/b/info") is None
    assert registry.resolve_resource("other://x") is None


def test_duplicate_resource_name_raises() -> None:
    """Resource names are unique as well."""
    registry = CommandRegistry()
    registry.register_resource(_resource("info", "a://x"))
    with pytest.raises(DuplicateCommandError):
        registry.register_resource(_resource("info", "b://y"))


def test_resources_split_static_and_templates() -> None:
    """Static resources and templates are listed separately."""
    registry = CommandRegistry()
    static = _resource("system-info", "system://info")
    template = _resource("user-info", "user://{username}/info")
    registry.register_resource(static)
    registry.register_resource(template)
    assert registry.list_resources() == [static]
    assert registry.list_resource_templates() == [template]
