"""Shared fixtures for SDK tests."""

import json
from pathlib import Path
from typing import Any, Callable, Dict, Union

import pytest

from stackplan_sdk import App

TreeContent = Union[str, Dict[str, Any]]


def write_tree(root: Path, files: Dict[str, TreeContent]) -> None:
    """Write ``files`` under ``root``. Dict values are written as JSON."""
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, dict):
            content = json.dumps(content)
        path.write_text(content)


@pytest.fixture
def make_app(tmp_path) -> Callable[[Dict[str, TreeContent]], App]:
    """Create an App over a temporary tree built from a ``{path: content}`` dict."""

    def _make(files: Dict[str, TreeContent]) -> App:
        write_tree(tmp_path, files)
        return App(tmp_path)

    return _make
