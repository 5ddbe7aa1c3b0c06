"""Shared fixtures and helpers for the rwsdk-tools test suite.

Provides an isolated RedwoodSDK-shaped project directory (``package.json``
plus ``src/``) and a ``write_file`` helper so tests can lay out router and
seed files in a couple of lines.
"""

from __future__ import annotations

import os
from collections.abc import Iterator
from pathlib import Path

import pytest

_PACKAGE_JSON = '{\n  "name": "my-rwsdk-app",\n  "private": true\n}\n'


def write_file(root: Path, relative: str, content: str) -> Path:
    """Write *content* to ``root / relative``, creating parent directories."""
    path = root / relative
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture()
def project_dir(tmp_path: Path) -> Iterator[Path]:
    """Create an isolated project root and cd into it.

    Yields:
        The resolved project root ``Path``.

    After the test, the working directory is restored.
    """
    root = tmp_path.resolve()
    (root / "package.json").write_text(_PACKAGE_JSON, encoding="utf-8")
    (root / "src").mkdir()

    original_cwd = Path.cwd()
    os.chdir(root)
    try:
        yield root
    finally:
        os.chdir(original_cwd)
