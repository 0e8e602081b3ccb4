"""Tests for version module."""

from __future__ import annotations

from importlib.metadata import version as distribution_version

import pytest
from packaging.version import Version
from typer.testing import CliRunner

from release_gateway import __version__
from release_gateway.cli.main import app


@pytest.mark.unit
class TestVersion:
    """Test version information."""

    def test_version_is_normalized_pep440(self) -> None:
        assert str(Version(__version__)) == __version__

    def test_matches_distribution_metadata(self) -> None:
        """The package version and the installed distribution agree."""
        assert Version(distribution_version("release-gateway")) == Version(__version__)

    def test_cli_reports_package_version(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(app, ["-V"])

        assert result.exit_code == 0
        assert result.stdout.strip() == f"release-gateway version {__version__}"
