"""Tests for flag definitions and the flags builder."""

import pytest

from stringplugin.flags import FlagBuilder, FlagDefinition, InvocationContext, flags


class TestFlagDefinition:
    """Tests for FlagDefinition."""

    def test_is_immutable(self) -> None:
        """Verify definitions cannot be modified after creation."""
        definition = FlagDefinition(name="string")

        with pytest.raises(AttributeError):
            definition.name = "other"  # type: ignore[misc]

    def test_char_must_be_single_character(self) -> None:
        """Verify multi-character aliases are rejected."""
        with pytest.raises(ValueError, match="single character"):
            FlagDefinition(name="string", char="st")

    def test_static_default(self) -> None:
        """Verify a non-callable default is returned as-is."""
        definition = FlagDefinition(name="minify", default=True)

        assert definition.resolve_default(None) is True

    def test_callable_default_receives_context(self) -> None:
        """Verify a default provider is called with the context."""
        seen: list[InvocationContext | None] = []

        def provider(context: InvocationContext | None) -> str:
            seen.append(context)
            return "value"

        definition = FlagDefinition(name="string", default=provider)
        context = InvocationContext(env_prefix="MYCLI")

        assert definition.resolve_default(context) == "value"
        assert seen == [context]


class TestFlagBuilder:
    """Tests for FlagBuilder."""

    def test_string_flag(self) -> None:
        """Verify string() builds a string definition."""
        definition = FlagBuilder().string(
            "string", char="s", description="Strings", multiple=True
        )

        assert definition == FlagDefinition(
            name="string",
            char="s",
            description="Strings",
            multiple=True,
        )

    def test_module_builder(self) -> None:
        """Verify the module exports a builder for the host."""
        assert isinstance(flags, FlagBuilder)
