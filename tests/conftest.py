"""Shared fixtures for the swoop test suite.

The ``pytest`` console script can run with a sys.path that excludes the
repository root. Ensure the flat top-level modules resolve to the local copies.
"""

import pathlib
import sys

import pytest

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent
PROJECT_ROOT_STR = str(PROJECT_ROOT)

if PROJECT_ROOT_STR not in sys.path:
    sys.path.insert(0, PROJECT_ROOT_STR)


def build_tree(root: pathlib.Path, layout: dict) -> pathlib.Path:
    """Create files and directories below root from a nested dict

    Dict values create subdirectories, int values create files of that many
    bytes and str values create files with that text.
    """
    root.mkdir(parents=True, exist_ok=True)
    for name, content in layout.items():
        path = root / name
        if isinstance(content, dict):
            build_tree(path, content)
        elif isinstance(content, int):
            path.write_bytes(b"x" * content)
        else:
            path.write_text(content)
    return root


def make_symlink(link: pathlib.Path, target: pathlib.Path, target_is_directory: bool = False):
    try:
        link.symlink_to(target, target_is_directory=target_is_directory)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported on this platform")


@pytest.fixture
def make_tree(tmp_path):
    def _make(layout: dict, name: str = "root") -> pathlib.Path:
        return build_tree(tmp_path / name, layout)

    return _make


@pytest.fixture
def config_dir(tmp_path):
    return tmp_path / "swoop-config"


@pytest.fixture
def symlink():
    return make_symlink
