"""Shared test fixtures for typesprint tests."""

import json
import random

import pytest
from PySide6.QtCore import QCoreApplication

from app.state import SessionState
from app.themes import Palette


@pytest.fixture(scope="session")
def qapp_cls():
    """pytest-qt builds a QCoreApplication; nothing here needs widgets."""
    return QCoreApplication


@pytest.fixture
def plain_palette():
    return Palette.plain()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def session():
    """A fresh session on a short known prompt."""
    return SessionState.new("ab cd", time_limit=1)


@pytest.fixture
def word_file(tmp_path):
    """Write a word list JSON file and return its path."""
    def _write(payload, name="words.json"):
        path = tmp_path / name
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload), encoding="utf-8")
        return path
    return _write
