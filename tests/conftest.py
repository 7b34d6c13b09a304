"""Shared test fixtures and configuration."""

import os
import tempfile
from pathlib import Path

import pytest

from shipnote.releasenote.commits import Commit, RawCommit


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep SHIPNOTE_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("SHIPNOTE_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def raw_commits():
    """Commits as listed by the host, newest first, tag commit last."""
    return [
        RawCommit(hash="a1b2c3d4e5f60718", message="feat(ui): add button\n"),
        RawCommit(hash="b2c3d4e5f6071829", message="Merge branch 'topic'"),
        RawCommit(hash="c3d4e5f607182930", message="fix: null check\n\nGuard against None."),
        RawCommit(hash="d4e5f60718293041", message="chore: bump\n"),
        RawCommit(hash="e5f6071829304152", message="chore(release): v1.1.0"),
    ]


@pytest.fixture
def sample_commits():
    """Classified commits spanning several types and categories."""
    return [
        Commit(hash="1111111111aaaaaa", type="feat", category="ui", subject="add button"),
        Commit(hash="2222222222bbbbbb", type="fix", category="core", subject="handle null"),
        Commit(hash="3333333333cccccc", type="feat", category="api", subject="add endpoint"),
        Commit(hash="4444444444dddddd", type="feat", category="ui", subject="add modal"),
        Commit(hash="5555555555eeeeee", type="chore", subject="bump deps"),
    ]
