"""
tests/test_layering.py
Enforce architectural layering:
  core   → may NOT import api
  utils  → may NOT import core, api
  api    → may import core and utils

Run: pytest tests/test_layering.py -v
"""

import sys, os, ast
from pathlib import Path

ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))


def get_imports(filepath: Path) -> list[str]:
    """Extract all imported module names from a Python file."""
    try:
        tree = ast.parse(filepath.read_text())
    except SyntaxError:
        return []
    imports = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                imports.append(alias.name)
        elif isinstance(node, ast.ImportFrom):
            if node.module:
                imports.append(node.module)
    return imports


def all_py_files(pkg_dir: Path):
    return list(pkg_dir.rglob("*.py"))


class TestLayering:
    def _check(self, package: str, forbidden: set[str]):
        pkg_dir = ROOT / package
        assert pkg_dir.exists(), f"missing package {package}"
        for pyfile in all_py_files(pkg_dir):
            imports = get_imports(pyfile)
            for imp in imports:
                top = imp.split(".")[0]
                assert top not in forbidden, (
                    f"LAYERING VIOLATION in {pyfile.relative_to(ROOT)}: "
                    f"'{package}' imports '{top}' — "
                    f"forbidden packages: {forbidden}"
                )

    def test_core_does_not_import_api(self):
        self._check("core", {"api"})

    def test_utils_does_not_import_core(self):
        self._check("utils", {"core"})

    def test_utils_does_not_import_api(self):
        self._check("utils", {"api"})

    def test_core_does_not_read_environment(self):
        for pyfile in all_py_files(ROOT / "core"):
            assert "os.environ" not in pyfile.read_text(), (
                f"{pyfile.relative_to(ROOT)} reads the environment; "
                f"pass configuration through ProbeConfig instead"
            )


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
