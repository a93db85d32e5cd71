"""Shared pytest fixtures and test helpers for polycalc tests."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from polycalc.config.settings import PolycalcSettings
from polycalc.parsing.errors import Diagnostic


class DiagnosticCollector:
    """Reporter that records diagnostics instead of writing to stderr."""

    def __init__(self) -> None:
        self.diagnostics: list[Diagnostic] = []

    def __call__(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)

    @property
    def lines(self) -> list[str]:
        return [str(d) for d in self.diagnostics]


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Undo configure_logging() so handlers never outlive a captured stream."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger("polycalc")
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def collect_diagnostics() -> DiagnosticCollector:
    """A fresh reporter that collects diagnostics in memory."""
    return DiagnosticCollector()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run in an empty temp directory with no config overrides in the env."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("POLYCALC_CONFIG", raising=False)


@pytest.fixture
def settings(_isolated_cwd: None, tmp_path: Path) -> PolycalcSettings:
    """Default settings with no TOML file in play."""
    return PolycalcSettings.from_cli(start_dir=tmp_path)
