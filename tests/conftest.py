import os

import pytest


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep GIT_COMMIT_RULES_* settings from the host out of the tests."""
    for name in list(os.environ):
        if name.startswith("GIT_COMMIT_RULES_"):
            monkeypatch.delenv(name)
    yield


@pytest.fixture
def message_file(tmp_path):
    """Write a commit message to a file and return its path."""
    def _write(text, name="COMMIT_EDITMSG"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
