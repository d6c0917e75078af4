"""Configuration models and utilities.

This module provides Pydantic models for the host settings and the bundle
data handed to input plugins, plus loading of settings from YAML files.

Models:
    - HostSettings: Environment prefix and flags module
    - SettingsFile: Root configuration model
    - BundleData: Host-supplied bundle configuration (read-only to plugins)

Functions:
    - load_settings: Load and validate settings from a YAML file
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ENV_PREFIX = "STRINGPLUGIN"
DEFAULT_FLAGS_MODULE = "stringplugin.flags"

# ${VAR_NAME} references allowed in host settings values
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


class HostSettings(BaseModel):
    """Settings for the plugin host.

    Both values may reference environment variables as ``${VAR}``, so a
    shared settings file can pick up the CLI prefix of the calling tool.

    Attributes:
        env_prefix: Prefix for environment variables read by flag defaults.
            The string flag reads ``{env_prefix}_STRING``.
        flags_module: Python module path exporting the flags builder.
    """

    env_prefix: str = DEFAULT_ENV_PREFIX
    flags_module: str = DEFAULT_FLAGS_MODULE

    @field_validator("env_prefix", "flags_module", mode="before")
    @classmethod
    def _expand_env_refs(cls, value: Any) -> Any:
        if not isinstance(value, str):
            return value

        def replacer(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable '{var_name}' not set")
            return env_value

        return _ENV_VAR_PATTERN.sub(replacer, value)


class SettingsFile(BaseModel):
    """Root configuration model.

    Attributes:
        version: Configuration schema version.
        host: Plugin host settings.
    """

    version: str = "1"
    host: HostSettings = Field(default_factory=HostSettings)


class BundleData(BaseModel):
    """Bundle configuration passed to input plugin responders.

    Attributes:
        cli_flags: Parsed and verified CLI flags, keyed by flag name.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    cli_flags: dict[str, Any] = Field(default_factory=dict, alias="cliFlags")


def load_settings(path: str | Path) -> SettingsFile:
    """Load and validate settings from a YAML file.

    Args:
        path: Path to the settings file.

    Returns:
        Validated SettingsFile instance.

    Raises:
        FileNotFoundError: If the settings file does not exist.
        yaml.YAMLError: If the file contains invalid YAML.
        ValueError: If the top level of the file is not a mapping.
        pydantic.ValidationError: If the configuration is invalid, including
            references to unset environment variables.

    Example:
        >>> settings = load_settings("stringplugin.yml")
        >>> settings.host.env_prefix
        'MYCLI'
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Settings file not found: {path}")

    with path.open() as f:
        data = yaml.safe_load(f)

    # Handle empty file
    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise ValueError(
            f"Settings file {path} must contain a mapping, "
            f"got {type(data).__name__}"
        )

    return SettingsFile.model_validate(data)
