"""Shared fixtures for Treemarks tests."""

import os

import pytest

from treemarks.models.node import BookmarkFields
from treemarks.models.tree import BookmarkTree


@pytest.fixture(autouse=True)
def isolate_config(tmp_path, monkeypatch):
    """Redirect config dir to a temp directory for all tests."""
    config_dir = tmp_path / ".treemarks"
    config_dir.mkdir()
    monkeypatch.setattr(
        "treemarks.utils.config.get_config_dir",
        lambda: config_dir,
    )
    return config_dir


@pytest.fixture
def tree():
    return BookmarkTree()


@pytest.fixture
def sample_tree():
    """Dev folder with two links and a nested Docs folder, plus a root link.

    Returns the tree and a name -> id mapping.
    """
    t = BookmarkTree()
    ids = {}
    ids["dev"] = t.insert(BookmarkFields(title="Dev", description="Programming"))
    ids["github"] = t.insert(
        BookmarkFields(title="GitHub", url="https://github.com", description="Code hosting"),
        ids["dev"],
    )
    ids["docs"] = t.insert(BookmarkFields(title="Docs"), ids["dev"])
    ids["python"] = t.insert(
        BookmarkFields(title="Python", url="https://docs.python.org", description="Language reference"),
        ids["docs"],
    )
    ids["news"] = t.insert(BookmarkFields(title="News", url="https://news.example.com"))
    return t, ids


def has_display() -> bool:
    return bool(
        os.environ.get("DISPLAY")
        or os.environ.get("WAYLAND_DISPLAY")
        or os.environ.get("QT_QPA_PLATFORM") == "offscreen"
    )


@pytest.fixture(scope="session")
def qapp():
    """Qt application for tests that need an event loop.

    Widgets need a full QApplication, which needs a display; the
    debouncer only needs the core event loop.
    """
    if has_display():
        from PyQt6.QtWidgets import QApplication
        app = QApplication.instance() or QApplication([])
    else:
        from PyQt6.QtCore import QCoreApplication
        app = QCoreApplication.instance() or QCoreApplication([])
    yield app
