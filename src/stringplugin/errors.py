"""Plugin error types and error codes.

This module defines the error hierarchy for the string plugin, separating
configuration problems that are reported to the user (non-fatal) from
failures that abort plugin activation.

Classes:
    - PluginErrorCode: Enum of error codes for categorizing plugin errors
    - PluginError: Base exception for all plugin-related errors
    - NonFatalError: User-facing configuration error that must not crash the CLI
"""

from enum import Enum


class PluginErrorCode(str, Enum):
    """Error codes for plugin operations."""

    # Configuration errors
    CONFIG_INVALID = "CONFIG_INVALID"
    CONFIG_MISSING = "CONFIG_MISSING"

    # Lifecycle errors
    LOAD_FAILED = "LOAD_FAILED"
    CONFLICT = "CONFLICT"


class PluginError(Exception):
    """Base exception for plugin errors.

    Attributes:
        code: The error code categorizing this error.
        message: Human-readable error message.
        plugin_name: Name of the plugin that caused the error (if applicable).
        cause: The underlying exception that caused this error (if any).
        fatal: Whether the error should abort the running command.

    Example:
        raise PluginError(
            code=PluginErrorCode.CONFLICT,
            message="Conflicts with rollup-plugin-string",
            plugin_name="@typhonjs-oclif-rollup/plugin-string",
        )
    """

    fatal = True

    def __init__(
        self,
        code: PluginErrorCode,
        message: str,
        plugin_name: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize the plugin error.

        Args:
            code: The error code for this error.
            message: Human-readable error message.
            plugin_name: Name of the plugin (optional).
            cause: The underlying exception (optional).
        """
        self.code = code
        self.message = message
        self.plugin_name = plugin_name
        self.cause = cause

        full_message = f"[{code.value}] {message}"
        if plugin_name:
            full_message = f"[{plugin_name}] {full_message}"

        super().__init__(full_message)


class NonFatalError(PluginError):
    """Configuration error that is reported to the user.

    The CLI prints the message and exits with a non-zero status instead of
    showing a traceback.
    """

    fatal = False

    def __init__(
        self,
        message: str,
        code: PluginErrorCode = PluginErrorCode.CONFIG_INVALID,
        plugin_name: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=code,
            message=message,
            plugin_name=plugin_name,
            cause=cause,
        )
