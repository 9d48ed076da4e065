"""Shared test fixtures for buildenv."""

from __future__ import annotations

import pytest


@pytest.fixture
def repo_root(tmp_path):
    """An empty repository root."""
    return tmp_path


@pytest.fixture
def env_file(repo_root):
    """Write a .env file in the repo root and return its path."""
    path = repo_root / ".env"

    def _write(content: str):
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def no_env():
    """A getenv stand-in with nothing set."""
    return lambda name: None


@pytest.fixture
def fake_env():
    """Build a getenv stand-in backed by a dict."""

    def _make(**values: str):
        return values.get

    return _make
