"""Pytest configuration — ensures the project root is importable."""

import os
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent))


@pytest.fixture(autouse=True)
def _isolated_env():
    """Hide any COTIZADOR_* variables from the developer's shell during a test."""
    saved = {k: v for k, v in os.environ.items() if k.startswith("COTIZADOR_")}
    for key in saved:
        del os.environ[key]
    yield
    for key in [k for k in os.environ if k.startswith("COTIZADOR_")]:
        del os.environ[key]
    os.environ.update(saved)
