"""Python scoring package resolution.

A package is a directory of .py files plus an attributes file naming the
entry point, e.g. {"main": "score.py"}. The main file and every other .py
file in the directory (non-recursive) are uploaded alongside the model when
building a Python web archive.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import jsonschema

from scorepack.compiler.errors import InvalidPackageError
from scorepack.fs import layout

logger = logging.getLogger(__name__)

PACKAGE_ATTRIBUTES_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["main"],
    "properties": {
        "main": {"type": "string", "minLength": 1},
    },
}


def load_package_attributes(attrs_path: Path) -> dict[str, Any]:
    """Read and validate a package attributes file.

    Raises:
        InvalidPackageError: File unreadable, not JSON, or missing a usable "main"
    """
    try:
        text = attrs_path.read_text(encoding="utf-8")
    except OSError as e:
        raise InvalidPackageError(f"Failed reading package attributes {attrs_path}: {e}") from e

    try:
        attrs = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidPackageError(f"Failed parsing package attributes {attrs_path}: {e}") from e

    try:
        jsonschema.validate(attrs, PACKAGE_ATTRIBUTES_SCHEMA)
    except jsonschema.ValidationError as e:
        if e.validator == "required":
            raise InvalidPackageError(
                f"Failed determining Python main file from package attributes {attrs_path}: "
                "no 'main' entry"
            ) from e
        raise InvalidPackageError(
            f"Invalid package attributes {attrs_path}: {e.message}"
        ) from e

    return attrs


def resolve_python_files(
    wd: str | Path,
    project_id: int,
    package_name: str,
) -> tuple[Path, list[Path]]:
    """Resolve the main and auxiliary .py files of a Python scoring package.

    Files are listed in filename order. The main file is the one whose name
    equals the declared "main" entry exactly; all other files with a .py
    suffix (any case) are auxiliary. Other files are ignored.

    Args:
        wd: Working directory root
        project_id: Project owning the package
        package_name: Package directory name

    Returns:
        Tuple of (main file path, auxiliary file paths)

    Raises:
        InvalidPackageError: Package missing, attributes invalid, or main file not found
    """
    package_dir = layout.package_path(wd, project_id, package_name)
    if not package_dir.is_dir():
        raise InvalidPackageError(f"Package {package_name} does not exist at {package_dir}")

    attrs = load_package_attributes(layout.package_attributes_path(wd, project_id, package_name))
    main_name = attrs["main"]

    try:
        entries = sorted(package_dir.iterdir(), key=lambda p: p.name)
    except OSError as e:
        raise InvalidPackageError(f"Failed reading package file list {package_dir}: {e}") from e

    main_path: Path | None = None
    aux_paths: list[Path] = []
    for entry in entries:
        if not entry.is_file() or entry.suffix.lower() != ".py":
            continue
        if entry.name == main_name:
            main_path = entry
        else:
            aux_paths.append(entry)

    if main_path is None:
        raise InvalidPackageError(
            f"Failed locating Python main file {main_name!r} in package {package_name}"
        )

    logger.debug(f"Package {package_name}: main={main_path.name}, {len(aux_paths)} auxiliary files")
    return main_path, aux_paths
