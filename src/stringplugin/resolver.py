"""Default value resolution for the string flag.

The default for ``--string`` comes from the ``{PREFIX}_STRING`` environment
variable when it is set, which must hold a JSON array of glob patterns.
Otherwise every HTML file is included.
"""

import json

import structlog

from stringplugin.errors import NonFatalError
from stringplugin.flags import InvocationContext

logger = structlog.get_logger()

DEFAULT_INCLUDE = ("**/*.html",)


def string_env_var(env_prefix: str) -> str:
    """Return the environment variable name for the string flag."""
    return f"{env_prefix}_STRING"


def resolve_string_default(context: InvocationContext | None) -> list[str]:
    """Compute the default value of the string flag.

    Args:
        context: The invocation context, or None when there is no live
            environment (for example while rendering help text).

    Returns:
        The parsed environment override, or ``["**/*.html"]``.

    Raises:
        NonFatalError: If the override is not valid JSON or not a JSON array
            of strings.
    """
    if context is None:
        return list(DEFAULT_INCLUDE)

    env_var = string_env_var(context.env_prefix)
    raw = context.environ.get(env_var)

    if not isinstance(raw, str):
        return list(DEFAULT_INCLUDE)

    # Treat it as a JSON array.
    try:
        result = json.loads(raw)
    except json.JSONDecodeError as e:
        raise NonFatalError(
            f"Could not parse '{env_var}' as a JSON array;\n{e}",
            cause=e,
        ) from e

    if not isinstance(result, list):
        raise NonFatalError(f"Please format '{env_var}' as a JSON array.")

    if not all(isinstance(item, str) for item in result):
        raise NonFatalError(
            f"Please format '{env_var}' as a JSON array of glob pattern strings."
        )

    logger.debug("string_flag_env_override", env_var=env_var, patterns=len(result))
    return result
