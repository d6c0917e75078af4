"""Flag definitions and the default flags builder.

The host resolves a flags module before plugin activation and hands its
``flags`` builder to the plugin, which uses it to describe the flags it adds.

Classes:
    - InvocationContext: Environment a flag default is computed in
    - FlagDefinition: Describes a single command-line flag
    - FlagBuilder: Creates FlagDefinition instances
"""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

DefaultProvider = Callable[["InvocationContext | None"], Any]


@dataclass(frozen=True)
class InvocationContext:
    """Environment in which flag defaults are computed.

    Attributes:
        env_prefix: CLI-wide prefix for environment variable names.
        environ: Environment variables visible to the invocation.
    """

    env_prefix: str
    environ: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class FlagDefinition:
    """Describes a command-line flag.

    Attributes:
        name: Long flag name without leading dashes (e.g., 'string').
        char: Optional single-character alias (e.g., 's').
        description: Help text for the flag.
        multiple: Whether the flag may be given more than once.
        default: Static default value or a provider called with the
            invocation context (None when there is no live environment).
    """

    name: str
    char: str | None = None
    description: str = ""
    multiple: bool = False
    default: DefaultProvider | Any = None

    def __post_init__(self) -> None:
        """Validate field values after initialization."""
        if self.char is not None and len(self.char) != 1:
            raise ValueError(f"char must be a single character, got {self.char!r}")

    def resolve_default(self, context: InvocationContext | None) -> Any:
        """Return the default value for this flag.

        Provider errors propagate so configuration problems surface when the
        flags are parsed.
        """
        if callable(self.default):
            return self.default(context)
        return self.default


class FlagBuilder:
    """Builds flag definitions for plugins.

    Example:
        flags = FlagBuilder()
        definition = flags.string("string", char="s", multiple=True)
    """

    def string(
        self,
        name: str,
        *,
        char: str | None = None,
        description: str = "",
        multiple: bool = False,
        default: DefaultProvider | Any = None,
    ) -> FlagDefinition:
        """Create a string-valued flag definition."""
        return FlagDefinition(
            name=name,
            char=char,
            description=description,
            multiple=multiple,
            default=default,
        )


# Builder exported to plugins by the host (see HostSettings.flags_module)
flags = FlagBuilder()
