"""Pytest configuration for the toyc test suite."""

import sys
from pathlib import Path

import pytest

# Make the src/ layout importable without an install
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from toyc.analyzer import SemanticAnalyzer  # noqa: E402
from toyc.parser import parse  # noqa: E402


@pytest.fixture
def check():
    """Parse and quietly analyze a source string; returns (verdict, diagnostics)."""

    def run(source: str):
        analyzer = SemanticAnalyzer(verbose=False)
        ok = analyzer.analyze(parse(source))
        return ok, analyzer.diagnostics

    return run
