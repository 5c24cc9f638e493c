"""Pytest configuration and shared fixtures."""

import pytest

# The chronomark plugin is registered via a ``pytest11`` entry point
# for external consumers.  Our own suite disables it
# (``-p no:chronomark``) and loads it here instead so that the
# chronomark import chain happens after ``pytest-cov`` starts tracing.
pytest_plugins = ["chronomark.testing._plugin"]


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (fast, no external dependencies)"
    )
