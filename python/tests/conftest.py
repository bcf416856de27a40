"""
Pytest configuration and fixtures for lineshell tests.
"""
import io
import sys
from pathlib import Path

import pytest

PYTHON_SRC = Path(__file__).resolve().parents[1]
if str(PYTHON_SRC) not in sys.path:
    sys.path.insert(0, str(PYTHON_SRC))

from lineshell import SharedIO, Shell  # noqa: E402


@pytest.fixture
def run_script():
    """Run *script* through a shell's blocking loop and return everything written."""

    def _run(shell: Shell, script: str) -> str:
        sink = io.BytesIO()
        shell.run_loop(SharedIO(io.BytesIO(script.encode("utf-8")), sink))
        return sink.getvalue().decode("utf-8")

    return _run


@pytest.fixture
def memory_io():
    def _make(data: bytes = b""):
        sink = io.BytesIO()
        return SharedIO(io.BytesIO(data), sink), sink

    return _make
