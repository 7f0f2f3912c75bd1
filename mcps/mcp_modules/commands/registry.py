"""Command registry and lookup functions.

One registry value is built per service at startup, frozen,
and handed to the transport. There is no module-level
singleton.
"""
from __future__ import annotations

from types import MappingProxyType

from mcps.mcp_modules.commands.types import CommandSpec, ResourceSpec
from mcps.mcp_modules.errors import DuplicateCommandError, RegistryFrozenError


class CommandRegistry:
    """Closed table of the commands and resources of one service."""

    def __init__(self) -> None:
        self._commands: dict[str, CommandSpec] = {}
        self._resources: dict[str, ResourceSpec] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        """True once the init phase has ended."""
        return self._frozen

    @property
    def commands(self) -> MappingProxyType[str, CommandSpec]:
        """Read-only view of the command table."""
        return MappingProxyType(self._commands)

    def register(self, spec: CommandSpec) -> None:
        """Add a command.

        Raises DuplicateCommandError if the name is taken and
        RegistryFrozenError after freeze().
        """
        self._check_open(spec.name)
        if spec.name in self._commands:
            msg = f"Command '{spec.name}' is already registered"
            raise DuplicateCommandError(msg)
        self._commands[spec.name] = spec

    def register_resource(self, spec: ResourceSpec) -> None:
        """Add a resource. Same rules as register()."""
        self._check_open(spec.name)
        if spec.name in self._resources:
            msg = f"Resource '{spec.name}' is already registered"
            raise DuplicateCommandError(msg)
        self._resources[spec.name] = spec

    def freeze(self) -> CommandRegistry:
        """End the init phase. Returns self for chaining."""
        self._frozen = True
        return self

    def resolve(self, name: str) -> CommandSpec | None:
        """Look up a command by name. Returns None if not found."""
        return self._commands.get(name)

    def resolve_resource(
        self,
        uri: str,
    ) -> tuple[ResourceSpec, dict[str, str]] | None:
        """Find the resource serving uri.

        Static resources win over templates. Returns the spec
        and the extracted placeholder values, or None.
        """
        for spec in self.list_resources():
            if spec.uri_template == uri:
                return spec, {}
        for spec in self.list_resource_templates():
            params = spec.match(uri)
            if params is not None:
                return spec, params
        return None

    def list_commands(self) -> list[CommandSpec]:
        """Return all registered commands in registration order."""
        return list(self._commands.values())

    def list_resources(self) -> list[ResourceSpec]:
        """Return static resources in registration order."""
        return [
            spec for spec in self._resources.values()
            if not spec.is_template
        ]

    def list_resource_templates(self) -> list[ResourceSpec]:
        """Return templated resources in registration order."""
        return [
            spec for spec in self._resources.values()
            if spec.is_template
        ]

    def _check_open(self, name: str) -> None:
        if self._frozen:
            msg = f"Cannot register '{name}': registry is frozen"
            raise RegistryFrozenError(msg)
