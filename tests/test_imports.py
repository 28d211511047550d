"""Every name imported by a distmatch module is used in that module.

Checked on the syntax tree, so the GUI modules are covered without
importing PySide6 or starting a Qt application.
"""

import ast
from pathlib import Path

import pytest

PACKAGE_DIR = Path(__file__).resolve().parent.parent / "distmatch"
MODULES = sorted(PACKAGE_DIR.glob("*.py"))


def _imported_names(tree: ast.Module, lines) -> dict:
    """``{bound name: line}`` for imports not marked ``noqa``."""
    names = {}
    for node in ast.walk(tree):
        if not isinstance(node, (ast.Import, ast.ImportFrom)):
            continue
        if "noqa" in lines[node.lineno - 1]:
            continue
        for alias in node.names:
            bound = alias.asname or alias.name.split(".")[0]
            names[bound] = node.lineno
    return names


def _used_names(tree: ast.Module) -> set:
    return {node.id for node in ast.walk(tree) if isinstance(node, ast.Name)}


@pytest.mark.parametrize("path", MODULES, ids=lambda p: p.name)
def test_no_unused_imports(path) -> None:
    source = path.read_text(encoding="utf-8")
    tree = ast.parse(source)
    imported = _imported_names(tree, source.splitlines())
    unused = sorted(set(imported) - _used_names(tree))
    assert not unused, f"{path.name}: unused imports {unused}"


def test_plot_board_layout_imports() -> None:
    source = (PACKAGE_DIR / "gui_plot_board.py").read_text(encoding="utf-8")
    tree = ast.parse(source)
    assert "QHBoxLayout" not in _imported_names(tree, source.splitlines())
