"""Tests for the configuration module.

Tests cover:
    - Pydantic model defaults and validation
    - YAML loading and parsing
    - Environment variable expansion
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from stringplugin.config import (
    BundleData,
    HostSettings,
    SettingsFile,
    load_settings,
)


class TestHostSettings:
    """Tests for HostSettings model."""

    def test_default_values(self) -> None:
        """Verify default host settings."""
        settings = HostSettings()

        assert settings.env_prefix == "STRINGPLUGIN"
        assert settings.flags_module == "stringplugin.flags"

    def test_root_defaults(self) -> None:
        """Verify default root settings."""
        settings = SettingsFile()

        assert settings.version == "1"
        assert settings.host == HostSettings()


class TestBundleData:
    """Tests for BundleData model."""

    def test_accepts_alias(self) -> None:
        """Verify the cliFlags alias is accepted."""
        data = BundleData.model_validate({"cliFlags": {"string": {"include": []}}})

        assert data.cli_flags == {"string": {"include": []}}

    def test_accepts_field_name(self) -> None:
        """Verify the field name is accepted."""
        data = BundleData(cli_flags={"minify": True})

        assert data.cli_flags == {"minify": True}

    def test_defaults_to_empty_flags(self) -> None:
        """Verify missing flags default to an empty mapping."""
        assert BundleData().cli_flags == {}

    def test_is_frozen(self) -> None:
        """Verify bundle data cannot be reassigned."""
        data = BundleData()

        with pytest.raises(ValidationError):
            data.cli_flags = {"string": None}


class TestEnvVarExpansion:
    """Tests for ${VAR} references in host settings."""

    def test_expand_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify a reference inside the prefix is expanded."""
        monkeypatch.setenv("TEST_PREFIX", "MYCLI")

        settings = HostSettings(env_prefix="${TEST_PREFIX}_X")

        assert settings.env_prefix == "MYCLI_X"

    def test_expand_flags_module(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Verify references are expanded in the flags module path."""
        monkeypatch.setenv("TEST_PKG", "myplugin")

        settings = HostSettings(flags_module="${TEST_PKG}.flags")

        assert settings.flags_module == "myplugin.flags"

    def test_missing_var_raises_error(self) -> None:
        """Verify an unset variable is a validation error naming it."""
        with pytest.raises(ValidationError, match="NONEXISTENT_VAR"):
            HostSettings(env_prefix="${NONEXISTENT_VAR}")

    def test_plain_values_unchanged(self) -> None:
        """Verify values without references are kept as-is."""
        assert HostSettings(env_prefix="PLAIN").env_prefix == "PLAIN"


class TestLoadSettings:
    """Tests for YAML settings loading."""

    def test_load_valid_yaml(self, tmp_path: Path) -> None:
        """Verify a valid settings file loads correctly."""
        path = tmp_path / "stringplugin.yml"
        path.write_text(
            yaml.safe_dump(
                {
                    "version": "1",
                    "host": {"env_prefix": "MYCLI", "flags_module": "my.flags"},
                }
            )
        )

        settings = load_settings(path)

        assert settings.host.env_prefix == "MYCLI"
        assert settings.host.flags_module == "my.flags"

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        """Verify an empty file yields default settings."""
        path = tmp_path / "empty.yml"
        path.write_text("")

        settings = load_settings(path)

        assert settings.host.env_prefix == "STRINGPLUGIN"

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Verify a missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_settings(tmp_path / "missing.yml")

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        """Verify invalid YAML raises a YAML error."""
        path = tmp_path / "bad.yml"
        path.write_text("host: [unclosed")

        with pytest.raises(yaml.YAMLError):
            load_settings(path)

    def test_invalid_types_raise_validation_error(self, tmp_path: Path) -> None:
        """Verify invalid field types are rejected."""
        path = tmp_path / "bad.yml"
        path.write_text("host:\n  env_prefix: [1, 2]\n")

        with pytest.raises(ValidationError):
            load_settings(path)

    def test_env_expansion_applied(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Verify ${VAR} patterns are expanded before validation."""
        monkeypatch.setenv("CLI_PREFIX", "FROMENV")
        path = tmp_path / "env.yml"
        path.write_text("host:\n  env_prefix: ${CLI_PREFIX}\n")

        settings = load_settings(path)

        assert settings.host.env_prefix == "FROMENV"

    def test_non_mapping_top_level_raises(self, tmp_path: Path) -> None:
        """Verify a YAML list at the top level is rejected."""
        path = tmp_path / "list.yml"
        path.write_text("- host\n- other\n")

        with pytest.raises(ValueError, match="must contain a mapping, got list"):
            load_settings(path)
