"""
Pytest configuration and shared fixtures for chatkeeper tests.
"""

import sys
from pathlib import Path

import pytest

# Allow running the suite without installing the package.
src_root = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_root))

from chatkeeper.commands.interpreter import CommandInterpreter  # noqa: E402
from chatkeeper.services.command_registry import CommandRegistry  # noqa: E402
from chatkeeper.services.stats import RuntimeStats  # noqa: E402
from chatkeeper.testing.fakes import FakeGateway  # noqa: E402


@pytest.fixture
def stats():
    return RuntimeStats()


@pytest.fixture
def registry():
    return CommandRegistry(lock_timeout=1.0)


@pytest.fixture
def interpreter(registry, stats):
    return CommandInterpreter(registry, stats)


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "logs" / "message_log.txt"
