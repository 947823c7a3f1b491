"""
Shared pytest configuration and fixtures for octocov-config tests.

This file contains:
- Marker registration
- Environment isolation from CI variables
- Helpers for writing config files into a temporary working directory
"""

from pathlib import Path
import sys
import textwrap

import pytest

# Add src directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests for individual components")
    config.addinivalue_line("markers", "cli: Tests that drive the command line entry point")


def pytest_collection_modifyitems(config, items):
    """Mark command line tests; everything else is a unit test."""
    for item in items:
        if "test_main" in str(item.fspath):
            item.add_marker(pytest.mark.cli)
        else:
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def isolated_ci_env(monkeypatch):
    """Hide CI variables of the machine running the tests."""
    for name in (
        "GITHUB_REPOSITORY",
        "GITHUB_EVENT_NAME",
        "GITHUB_EVENT_PATH",
        "OCTOCOV_CONFIG",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def write_config(tmp_path):
    """Write a config file under the temporary working directory."""

    def _write(content: str, name: str = ".octocov.yml") -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def sample_config_yaml():
    """A config document touching every section."""
    return """
    repository: ${OWNER}/widgets
    coverage:
      path: coverage.out
      badge:
        path: docs/coverage.svg
      acceptable: 60%
    codeToTestRatio:
      code:
        - '**/*.go'
        - '!**/*_test.go'
      test:
        - '**/*_test.go'
      badge:
        path: docs/ratio.svg
    datastore:
      if: github.event_name == 'push'
      github:
        repository: acme/octocov-reports
        branch: $BRANCH
    central:
      enable: true
      root: $CENTRAL_ROOT
    """
