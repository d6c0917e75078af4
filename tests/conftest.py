"""Shared pytest fixtures."""

from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def reset_structlog() -> Iterator[None]:
    """Restore the default structlog configuration after each test.

    The CLI configures structlog against the stderr stream of the running
    invocation, which CliRunner closes when the invocation ends.
    """
    yield
    structlog.reset_defaults()
