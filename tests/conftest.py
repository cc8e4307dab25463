"""Pytest configuration and fixtures."""

import logging
import os

import pytest


def pytest_configure(config: pytest.Config) -> None:
    """Show resolver debug logs when PROCENV_TEST_DEBUG=1."""

    if os.environ.get("PROCENV_TEST_DEBUG") != "1":
        return

    logging.getLogger("procenv").setLevel(logging.DEBUG)


@pytest.fixture
def isolated_settings_env(tmp_path, monkeypatch):
    """Run in an empty working directory with no PROCENV_* overrides.

    ResolverSettings reads ``.env`` from the working directory and every
    ``PROCENV_`` variable, so both are cleared for settings tests.
    """

    for key in list(os.environ):
        if key.upper().startswith("PROCENV_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path
