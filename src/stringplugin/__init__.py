"""stringplugin: string / text imports for the bundle command.

Core Components:
    - loader: PluginLoader, the plugin entry point wired onto the event bus
    - resolver: Default value for the string flag with environment override
    - verifier: Normalizes the parsed string flag into plugin options
    - bundler: The string input plugin handed to the bundler
    - host: Flag registry and plugin activation
"""

from stringplugin.errors import NonFatalError, PluginError, PluginErrorCode
from stringplugin.loader import (
    FLAG_ADD_EVENT,
    INPUT_GET_EVENT,
    PluginLoader,
    PluginLoadEvent,
    PluginOptions,
)

__all__ = [
    "FLAG_ADD_EVENT",
    "INPUT_GET_EVENT",
    "NonFatalError",
    "PluginError",
    "PluginErrorCode",
    "PluginLoadEvent",
    "PluginLoader",
    "PluginOptions",
]
