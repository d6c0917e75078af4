"""Plugin host: flag registry, plugin activation and flag parsing.

This module provides the host side of the plugin protocol:
    - FlagRegistry: Collects flags added by plugins, per command
    - PluginHost: Activates plugins, applies flag defaults and verify hooks,
      and queries input plugins

Example:
    host = PluginHost(HostSettings(env_prefix="MYCLI"))
    await host.load_plugin(PluginLoader)
    flags = host.parse_flags("bundle", {"string": ["*.txt"]})
    plugin = host.get_input_plugin(BundleData(cli_flags=flags))
"""

import importlib
import os
from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass, field
from typing import Any, Protocol

import structlog

from stringplugin.config import BundleData, HostSettings
from stringplugin.errors import PluginError, PluginErrorCode
from stringplugin.eventbus import EventBus
from stringplugin.flags import FlagBuilder, FlagDefinition, InvocationContext
from stringplugin.loader import (
    FLAG_ADD_EVENT,
    INPUT_GET_EVENT,
    PluginLoadEvent,
    PluginOptions,
)

logger = structlog.get_logger()

VerifyHook = Callable[[MutableMapping[str, Any]], None]


class LoadablePlugin(Protocol):
    """Interface a plugin loader class exposes to the host."""

    @classmethod
    def conflict_packages(cls) -> list[str]: ...

    @classmethod
    def package_name(cls) -> str: ...

    @classmethod
    async def on_plugin_load(cls, ev: PluginLoadEvent) -> None: ...


@dataclass
class CommandFlags:
    """Flags registered for a single command.

    Attributes:
        definitions: Flag name -> definition.
        owners: Flag name -> name of the plugin that added it.
        verify_hooks: Post-parse hooks in registration order.
    """

    definitions: dict[str, FlagDefinition] = field(default_factory=dict)
    owners: dict[str, str] = field(default_factory=dict)
    verify_hooks: list[VerifyHook] = field(default_factory=list)


class FlagRegistry:
    """Registry of flags added by plugins.

    Plugins add flags by triggering the flag-add event with a payload of
    ``{command, pluginName, flags, verify}``.
    """

    def __init__(self) -> None:
        self._commands: dict[str, CommandFlags] = {}

    def attach(self, eventbus: EventBus) -> None:
        """Listen for flag-add events on ``eventbus``."""
        eventbus.on(FLAG_ADD_EVENT, self.add, self)

    def add(self, payload: Mapping[str, Any]) -> None:
        """Register the flags described by a flag-add payload.

        Raises:
            PluginError: If the payload is malformed or a flag name is
                already registered for the command.
        """
        command = payload.get("command")
        plugin_name = payload.get("pluginName")
        definitions = payload.get("flags") or {}

        if not command or not plugin_name:
            raise PluginError(
                code=PluginErrorCode.CONFIG_INVALID,
                message="Flag registration requires 'command' and 'pluginName'",
                plugin_name=plugin_name,
            )

        entry = self._commands.setdefault(command, CommandFlags())

        # Check all names before registering any
        for name in definitions:
            if name in entry.definitions:
                raise PluginError(
                    code=PluginErrorCode.CONFIG_INVALID,
                    message=(
                        f"Flag '--{name}' for command '{command}' already added "
                        f"by {entry.owners[name]}"
                    ),
                    plugin_name=plugin_name,
                )

        for name, definition in definitions.items():
            entry.definitions[name] = definition
            entry.owners[name] = plugin_name

        verify = payload.get("verify")
        if verify is not None:
            entry.verify_hooks.append(verify)

        logger.info(
            "flags_added",
            command=command,
            plugin=plugin_name,
            flags=sorted(definitions),
        )

    def get_flags(self, command: str) -> dict[str, FlagDefinition]:
        """Return the flag definitions registered for ``command``."""
        entry = self._commands.get(command)
        return dict(entry.definitions) if entry else {}

    def get_owner(self, command: str, flag_name: str) -> str | None:
        """Return the plugin that added ``flag_name`` to ``command``."""
        entry = self._commands.get(command)
        return entry.owners.get(flag_name) if entry else None

    def get_verify_hooks(self, command: str) -> list[VerifyHook]:
        """Return the verify hooks registered for ``command``."""
        entry = self._commands.get(command)
        return list(entry.verify_hooks) if entry else []


class PluginHost:
    """Activates plugins and runs the flag and bundle events for them.

    Attributes:
        settings: Host settings.
        eventbus: Event bus shared with plugins.
        flag_registry: Flags added by plugins.
    """

    def __init__(
        self,
        settings: HostSettings | None = None,
        eventbus: EventBus | None = None,
    ) -> None:
        self.settings = settings or HostSettings()
        self.eventbus = eventbus or EventBus()
        self.flag_registry = FlagRegistry()
        self.flag_registry.attach(self.eventbus)
        self._plugins: dict[str, LoadablePlugin] = {}

    @property
    def loaded_plugins(self) -> list[str]:
        """Names of the plugins loaded so far, in load order."""
        return list(self._plugins)

    def _check_conflicts(self, plugin: LoadablePlugin) -> None:
        name = plugin.package_name()

        if name in self._plugins:
            raise PluginError(
                code=PluginErrorCode.CONFLICT,
                message="Plugin already loaded",
                plugin_name=name,
            )

        for loaded_name, loaded in self._plugins.items():
            if loaded_name in plugin.conflict_packages():
                raise PluginError(
                    code=PluginErrorCode.CONFLICT,
                    message=f"Conflicts with loaded package {loaded_name}",
                    plugin_name=name,
                )
            if name in loaded.conflict_packages():
                raise PluginError(
                    code=PluginErrorCode.CONFLICT,
                    message=f"Loaded plugin {loaded_name} conflicts with this package",
                    plugin_name=name,
                )

    def _resolve_flags_builder(self) -> FlagBuilder:
        # Import errors propagate unwrapped to the caller
        module = importlib.import_module(self.settings.flags_module)
        return module.flags

    async def load_plugin(
        self,
        plugin: LoadablePlugin,
        extra_options: dict[str, Any] | None = None,
    ) -> None:
        """Activate a plugin.

        Resolves the flags builder, then awaits the plugin's ``on_plugin_load``
        so its flags exist before any parsing happens.

        Args:
            plugin: The plugin loader class.
            extra_options: Additional plugin-specific options.

        Raises:
            PluginError: If the plugin conflicts with a loaded plugin.
            ImportError: If the flags module cannot be imported.
        """
        self._check_conflicts(plugin)

        event = PluginLoadEvent(
            eventbus=self.eventbus,
            plugin_options=PluginOptions(
                flags=self._resolve_flags_builder(),
                extra=extra_options or {},
            ),
        )

        try:
            await plugin.on_plugin_load(event)
        except Exception as e:
            logger.error(
                "plugin_load_failed",
                plugin=plugin.package_name(),
                error=str(e),
            )
            raise

        self._plugins[plugin.package_name()] = plugin
        logger.info("plugin_loaded", plugin=plugin.package_name())

    def context(self) -> InvocationContext:
        """Return the invocation context for the current process."""
        return InvocationContext(
            env_prefix=self.settings.env_prefix,
            environ=dict(os.environ),
        )

    def parse_flags(
        self,
        command: str,
        values: Mapping[str, Any],
        context: InvocationContext | None = None,
    ) -> dict[str, Any]:
        """Apply flag defaults and verify hooks to parsed values.

        A flag's default provider runs when its value is missing: None, or an
        empty sequence for flags that allow multiple values.

        Args:
            command: The command the values were parsed for.
            values: Flag values from the command line.
            context: Invocation context, defaults to ``self.context()``.

        Returns:
            The verified flags.

        Raises:
            NonFatalError: If a default provider rejects its configuration.
        """
        if context is None:
            context = self.context()

        flags = dict(values)
        for name, definition in self.flag_registry.get_flags(command).items():
            value = flags.get(name)
            missing = value is None or (
                definition.multiple and isinstance(value, (list, tuple)) and not value
            )
            if missing:
                flags[name] = definition.resolve_default(context)

        for hook in self.flag_registry.get_verify_hooks(command):
            hook(flags)

        return flags

    def get_input_plugin(self, bundle_data: BundleData | None = None) -> Any:
        """Ask loaded plugins for their main input plugin.

        Returns:
            The single plugin answering, a list when several answer, or None.
        """
        if bundle_data is None:
            bundle_data = BundleData()
        return self.eventbus.trigger_sync(INPUT_GET_EVENT, bundle_data)
