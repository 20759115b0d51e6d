"""Tests for Python scoring package resolution."""

from pathlib import Path

import pytest

from scorepack.compiler.errors import InvalidPackageError
from scorepack.compiler.packages import resolve_python_files

PROJECT_ID = 7


def test_partitions_main_and_auxiliary_files(workdir: Path, make_package) -> None:
    package_dir = make_package(
        "scoring",
        {"a.py": "def score(): pass", "b.py": "X = 1", "c.txt": "notes"},
        {"main": "a.py"},
    )

    main, aux = resolve_python_files(workdir, PROJECT_ID, "scoring")

    assert main == package_dir / "a.py"
    assert aux == [package_dir / "b.py"]


def test_auxiliary_files_in_filename_order(workdir: Path, make_package) -> None:
    package_dir = make_package(
        "scoring",
        {"main.py": "", "zeta.py": "", "alpha.py": "", "Upper.PY": ""},
        {"main": "main.py"},
    )

    _, aux = resolve_python_files(workdir, PROJECT_ID, "scoring")

    assert [p.name for p in aux] == ["Upper.PY", "alpha.py", "zeta.py"]
    assert all(p.parent == package_dir for p in aux)


def test_subdirectories_are_ignored(workdir: Path, make_package) -> None:
    package_dir = make_package("scoring", {"main.py": ""}, {"main": "main.py"})
    (package_dir / "nested.py").mkdir()

    main, aux = resolve_python_files(workdir, PROJECT_ID, "scoring")

    assert main.name == "main.py"
    assert aux == []


def test_missing_package_directory(workdir: Path) -> None:
    with pytest.raises(InvalidPackageError) as exc:
        resolve_python_files(workdir, PROJECT_ID, "absent")
    assert "Package absent does not exist" in str(exc.value)


def test_missing_attributes_file(workdir: Path, make_package) -> None:
    make_package("scoring", {"main.py": ""}, None)
    with pytest.raises(InvalidPackageError) as exc:
        resolve_python_files(workdir, PROJECT_ID, "scoring")
    assert "Failed reading package attributes" in str(exc.value)


def test_unparseable_attributes(workdir: Path, make_package) -> None:
    make_package("scoring", {"main.py": ""}, "{not json")
    with pytest.raises(InvalidPackageError) as exc:
        resolve_python_files(workdir, PROJECT_ID, "scoring")
    assert "Failed parsing package attributes" in str(exc.value)


def test_missing_main_declaration(workdir: Path, make_package) -> None:
    make_package("scoring", {"a.py": ""}, {"description": "no entry point"})
    with pytest.raises(InvalidPackageError) as exc:
        resolve_python_files(workdir, PROJECT_ID, "scoring")
    assert "no 'main' entry" in str(exc.value)


def test_main_must_be_a_string(workdir: Path, make_package) -> None:
    make_package("scoring", {"a.py": ""}, {"main": ["a.py"]})
    with pytest.raises(InvalidPackageError) as exc:
        resolve_python_files(workdir, PROJECT_ID, "scoring")
    assert "Invalid package attributes" in str(exc.value)


def test_attributes_must_be_an_object(workdir: Path, make_package) -> None:
    make_package("scoring", {"a.py": ""}, '["a.py"]')
    with pytest.raises(InvalidPackageError):
        resolve_python_files(workdir, PROJECT_ID, "scoring")


def test_main_file_not_found(workdir: Path, make_package) -> None:
    make_package("scoring", {"b.py": ""}, {"main": "missing.py"})
    with pytest.raises(InvalidPackageError) as exc:
        resolve_python_files(workdir, PROJECT_ID, "scoring")
    assert "Failed locating Python main file 'missing.py'" in str(exc.value)


def test_main_match_is_exact(workdir: Path, make_package) -> None:
    """A main entry differing only in case does not match."""
    make_package("scoring", {"Score.py": ""}, {"main": "score.py"})
    with pytest.raises(InvalidPackageError):
        resolve_python_files(workdir, PROJECT_ID, "scoring")
