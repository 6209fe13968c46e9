"""
Pytest configuration and fixtures for Gearbox tests.
"""

import os
import tempfile
from pathlib import Path

import pytest

from gearbox.settings import reload_settings

from .fakes import HOMEDIR, MemoryFilesystem


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from GB_* variables in the calling environment."""
    for key in list(os.environ):
        if key.upper().startswith("GB_"):
            monkeypatch.delenv(key, raising=False)
    reload_settings()
    yield
    reload_settings()


@pytest.fixture
def temp_dir():
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def memory_fs():
    """An empty in-memory filesystem with just /home."""
    fs = MemoryFilesystem()
    fs.add_dir("/home")
    return fs


@pytest.fixture
def ssh_home(memory_fs):
    """In-memory filesystem with a homedir and an empty .ssh directory."""
    memory_fs.add_dir(HOMEDIR)
    memory_fs.add_dir(HOMEDIR / ".ssh")
    return memory_fs
