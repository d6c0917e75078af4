"""Plugin loader wiring the string plugin into the host.

The loader adds the ``--string`` / ``-s`` flag to the ``bundle`` command and
answers the host's input plugin query with a configured string plugin.

Classes:
    - PluginOptions: Options the host passes on plugin load
    - PluginLoadEvent: Event handed to ``on_plugin_load``
    - PluginLoader: The plugin entry point
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from stringplugin import bundler
from stringplugin.config import BundleData
from stringplugin.eventbus import EventBus
from stringplugin.flags import FlagBuilder
from stringplugin.resolver import resolve_string_default
from stringplugin.verifier import verify_string_flag

logger = structlog.get_logger()

EVENT_NAMESPACE = "typhonjs:oclif"
FLAG_ADD_EVENT = f"{EVENT_NAMESPACE}:system:handler:flag:add"
INPUT_GET_EVENT = f"{EVENT_NAMESPACE}:bundle:plugins:main:input:get"

_CONFLICT_PACKAGES = ("rollup-plugin-string",)
_PACKAGE_NAME = "@typhonjs-oclif-rollup/plugin-string"


@dataclass(frozen=True)
class PluginOptions:
    """Options passed to a plugin when it is loaded.

    Attributes:
        flags: Flags builder resolved by the host from its flags module.
        extra: Any additional plugin-specific options.
    """

    flags: FlagBuilder
    extra: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PluginLoadEvent:
    """Event handed to a plugin's ``on_plugin_load``.

    Attributes:
        eventbus: The host's shared event bus.
        plugin_options: Options for this plugin.
    """

    eventbus: EventBus
    plugin_options: PluginOptions


class PluginLoader:
    """Adds the string flag and provides the configured string input plugin."""

    @classmethod
    def conflict_packages(cls) -> list[str]:
        """Return the packages this plugin cannot be loaded alongside."""
        return list(_CONFLICT_PACKAGES)

    @classmethod
    def package_name(cls) -> str:
        """Return the package name used for ownership bookkeeping."""
        return _PACKAGE_NAME

    @classmethod
    def add_flags(cls, eventbus: EventBus, flags: FlagBuilder) -> None:
        """Register flags for the ``bundle`` command.

        Added flags include:
            ``--string`` / ``-s``: Allows imports of string / text content.
            Defaults to ``{PREFIX}_STRING`` when set, else ``["**/*.html"]``.

        Args:
            eventbus: The event bus to add flags on.
            flags: The flags builder.
        """
        eventbus.trigger(
            FLAG_ADD_EVENT,
            {
                "command": "bundle",
                "pluginName": cls.package_name(),
                "flags": {
                    "string": flags.string(
                        "string",
                        char="s",
                        description="Allows imports of string / text content.",
                        multiple=True,
                        default=resolve_string_default,
                    ),
                },
                "verify": verify_string_flag,
            },
        )

    @staticmethod
    def get_input_plugin(
        bundle_data: BundleData | Mapping[str, Any] | None = None,
    ) -> bundler.StringPlugin | None:
        """Return the configured string plugin.

        Args:
            bundle_data: The bundle configuration holding the verified CLI flags.

        Returns:
            A StringPlugin configured from ``cli_flags["string"]``, or None when
            the flag is absent or was never normalized into options.
        """
        if isinstance(bundle_data, BundleData):
            cli_flags = bundle_data.cli_flags
        elif isinstance(bundle_data, Mapping):
            cli_flags = bundle_data.get("cliFlags", bundle_data.get("cli_flags"))
        else:
            cli_flags = None

        if not isinstance(cli_flags, Mapping):
            return None

        options = cli_flags.get("string")
        if not isinstance(options, Mapping):
            return None

        return bundler.string(options)

    @classmethod
    async def on_plugin_load(cls, ev: PluginLoadEvent) -> None:
        """Wire the loader onto the plugin event bus.

        Args:
            ev: The plugin load event.
        """
        ev.eventbus.on(INPUT_GET_EVENT, cls.get_input_plugin, cls)

        cls.add_flags(ev.eventbus, ev.plugin_options.flags)

        logger.debug("plugin_wired", plugin=cls.package_name())
