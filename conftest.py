from pathlib import Path

import pytest
from _pytest.doctest import DoctestModule

ROOT = Path(__file__).resolve().parent

DOCTEST_MODULES = {
    ROOT / "src" / "workon" / "__init__.py",
    ROOT / "src" / "workon" / "config.py",
    ROOT / "src" / "workon" / "fs.py",
    ROOT / "src" / "workon" / "git.py",
    ROOT / "src" / "workon" / "io.py",
    ROOT / "src" / "workon" / "models.py",
    ROOT / "src" / "workon" / "paths.py",
    ROOT / "src" / "workon" / "workdir.py",
}


def pytest_collect_file(
    parent: pytest.Collector, file_path: Path
) -> DoctestModule | None:
    path = file_path if isinstance(file_path, Path) else Path(str(file_path))
    if path in DOCTEST_MODULES:
        return DoctestModule.from_parent(parent, path=path)
    return None
