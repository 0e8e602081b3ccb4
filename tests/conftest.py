"""Shared pytest fixtures for release_gateway tests."""

from __future__ import annotations

import io
import os
import tarfile
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from typer.testing import CliRunner

CHART_YAML = b"""apiVersion: v1
name: nginx
version: 1.2.0
appVersion: "1.25"
description: A web server
keywords:
  - web
maintainers:
  - name: ops
    email: ops@example.com
"""

VALUES_YAML = b"replicaCount: 1\nimage:\n  tag: stable\n"


def build_chart_archive(files: dict[str, bytes], top: str = "nginx") -> bytes:
    """Pack files into a gzipped chart archive under a ``top`` directory."""
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        for name, content in files.items():
            info = tarfile.TarInfo(name=f"{top}/{name}" if top else name)
            info.size = len(content)
            tar.addfile(info, io.BytesIO(content))
    return buffer.getvalue()


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir(tmp_path: Path) -> Generator[Path]:
    """Provide a temporary directory and run the test from inside it."""
    cwd = Path.cwd()
    os.chdir(tmp_path)
    try:
        yield tmp_path
    finally:
        os.chdir(cwd)


@pytest.fixture
def chart_files() -> dict[str, bytes]:
    """Files of a small chart, relative to the chart root."""
    return {
        "Chart.yaml": CHART_YAML,
        "values.yaml": VALUES_YAML,
        "templates/deployment.yaml": b"kind: Deployment\n",
        "templates/service.yaml": b"kind: Service\n",
        "README.md": b"# nginx\n",
    }


@pytest.fixture
def chart_archive_bytes(chart_files: dict[str, bytes]) -> bytes:
    """Gzipped archive of the small chart."""
    return build_chart_archive(chart_files)


@pytest.fixture
def make_chart_archive(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a chart archive to disk and returning its path."""

    def _make(files: dict[str, bytes], name: str = "chart.tgz", top: str = "nginx") -> Path:
        path = tmp_path / name
        path.write_bytes(build_chart_archive(files, top=top))
        return path

    return _make


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear RG_ prefixed environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("RG_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def archive_builder() -> Callable[..., bytes]:
    """Return the in-memory chart archive builder."""
    return build_chart_archive
