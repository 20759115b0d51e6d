"""Shared fixtures: a working directory populated with model files."""

import json
from pathlib import Path

import pytest

from scorepack.fs import layout

MODEL_ID = 42
PROJECT_ID = 7
MODEL_NAME = "gbm_churn"


@pytest.fixture
def workdir(tmp_path: Path) -> Path:
    """Working directory holding a pojo, a mojo and the dependency archive for model 42."""
    model_dir = layout.model_dir(tmp_path, MODEL_ID)
    model_dir.mkdir(parents=True)
    (model_dir / f"{MODEL_NAME}.java").write_text("public class gbm_churn {}", encoding="utf-8")
    (model_dir / f"{MODEL_NAME}.zip").write_bytes(b"PK\x03\x04mojo")
    (model_dir / layout.MODEL_DEPENDENCY_FILENAME).write_bytes(b"PK\x03\x04genmodel")
    return tmp_path


@pytest.fixture
def make_package(workdir: Path):
    """Return a factory creating a Python package under project 7 of workdir.

    attrs may be a dict (dumped as JSON), raw text, or None for no attributes file.
    """

    def _make(package_name: str, files: dict[str, str], attrs: object) -> Path:
        package_dir = layout.package_path(workdir, PROJECT_ID, package_name)
        package_dir.mkdir(parents=True)
        for name, content in files.items():
            (package_dir / name).write_text(content, encoding="utf-8")
        if attrs is not None:
            text = attrs if isinstance(attrs, str) else json.dumps(attrs)
            layout.package_attributes_path(workdir, PROJECT_ID, package_name).write_text(
                text, encoding="utf-8"
            )
        return package_dir

    return _make
