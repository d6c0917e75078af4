"""Post-parse verification for the string flag."""

from collections.abc import MutableMapping
from typing import Any


def verify_string_flag(flags: MutableMapping[str, Any]) -> None:
    """Normalize the parsed ``string`` flag in place.

    A list of patterns becomes ``{"include": [...]}``, the options shape the
    bundler plugin expects. Any other value, including an already normalized
    mapping, is left untouched so repeated verification is a no-op.

    Args:
        flags: The parsed CLI flags for the command.
    """
    value = flags.get("string")
    if isinstance(value, (list, tuple)):
        flags["string"] = {"include": list(value)}
