"""Pytest configuration and shared fixtures for the bb2html test suite.

This module registers markers and Hypothesis profiles and provides fixtures
shared across the unit, integration and CLI tests.
"""

import os
from pathlib import Path
from typing import Any, Generator

import pytest
from hypothesis import Phase, Verbosity, settings

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)

# Load profile from environment or use default
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests driven by Hypothesis")


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[Path, None, None]:
    """Run in an empty working directory with no bb2html environment variables.

    Config discovery walks up from the working directory and into the home
    directory, so both point at the temporary directory.

    Yields
    ------
    Path
        The temporary working directory.

    """
    for key in list(os.environ):
        if key.startswith("BB2HTML_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    yield tmp_path


@pytest.fixture
def forum_post() -> str:
    """Provide a representative BBCode forum post.

    Returns
    -------
    str
        Post using inline formatting, a list, a table and a link.

    """
    return (
        "[b]Release notes[/b]\n"
        "[size=5]Version 2[/size] is out!\n"
        "[ul]\n"
        "[li]Faster [i]parsing[/i][/li]\n"
        "[li]New [color=red]colors[/color][/li]\n"
        "[/ul]\n"
        "[table]\n"
        "[tr][td]a[/td][td colspan=2]b[/td][/tr]\n"
        "[/table]\n"
        "See [url=https://example.com/notes]the notes[/url]."
    )


@pytest.fixture
def shop_params() -> dict[str, Any]:
    """Provide template params with a list, a flag and scalar values.

    Returns
    -------
    dict
        Params for the template tag tests.

    """
    return {
        "user": "Ann",
        "admin": False,
        "items": [
            {"name": "apple", "price": 1.0},
            {"name": "pear", "price": 2.5},
        ],
    }
