"""
Pytest fixtures for fuzzyedit tests.
"""

import os

import pytest

from fuzzyedit.core.config import EditSettings


@pytest.fixture(autouse=True)
def _clean_env():
    """Prevent environment variable pollution between tests.

    load_settings() honours FUZZYEDIT_* variables, so a developer's shell
    settings must not leak into tests, and tests that set them must not
    leak into each other.
    """
    original_env = os.environ.copy()
    for name in list(os.environ):
        if name.startswith("FUZZYEDIT_"):
            del os.environ[name]
    yield
    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def pending_dir(tmp_path):
    """Directory for pending edits."""
    return tmp_path / "pending"


@pytest.fixture
def settings(pending_dir):
    """Default settings with pending edits stored under tmp_path."""
    return EditSettings(pending_dir=str(pending_dir))


@pytest.fixture
def sample_doc(tmp_path):
    """Create a sample Python file for editing."""
    content = """import os
import sys

def main():
    x = 1
    y = 2
    print(x + y)

def helper():
    pass

if __name__ == "__main__":
    main()
"""
    path = tmp_path / "sample.py"
    path.write_text(content)
    return path
