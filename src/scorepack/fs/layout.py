"""
Working-directory layout for models, packages and compiled artifacts.

Layout:
    <wd>/model/<model_id>/
      genmodel.jar                  model dependency archive
      <model_name>.java             generated source model (pojo)
      <model_name>.zip              portable model binary (mojo)
      <model_name>.jar              compiled java archive
      <model_name>.war              web archive
      <model_name>-python.war       python web archive
    <wd>/project/<project_id>/packages/<package_name>/
      package.attrs.json            package attributes ({"main": "score.py"})
      *.py
"""

from __future__ import annotations

from pathlib import Path

from scorepack.compiler.kinds import ArtifactKind, ModelKind

MODEL_DEPENDENCY_FILENAME = "genmodel.jar"
PACKAGE_ATTRIBUTES_FILENAME = "package.attrs.json"

_MODEL_SUFFIXES = {
    ModelKind.POJO: ".java",
    ModelKind.MOJO: ".zip",
}

_ARTIFACT_SUFFIXES = {
    ArtifactKind.JAR: ".jar",
    ArtifactKind.WAR: ".war",
    ArtifactKind.PYTHON_WAR: "-python.war",
}


def model_dir(wd: str | Path, model_id: int) -> Path:
    return Path(wd) / "model" / str(model_id)


def model_dependency_path(wd: str | Path, model_id: int) -> Path:
    """Path of the dependency archive the compiler needs next to the model."""
    return model_dir(wd, model_id) / MODEL_DEPENDENCY_FILENAME


def model_asset_path(wd: str | Path, model_id: int, model_name: str, kind: ModelKind) -> Path:
    """Path of the primary model file for the given model kind."""
    return model_dir(wd, model_id) / f"{model_name}{_MODEL_SUFFIXES[kind]}"


def artifact_path(wd: str | Path, model_id: int, model_name: str, kind: ArtifactKind) -> Path:
    """Deterministic target path of a compiled artifact."""
    return model_dir(wd, model_id) / f"{model_name}{_ARTIFACT_SUFFIXES[kind]}"


def package_path(wd: str | Path, project_id: int, package_name: str) -> Path:
    return Path(wd) / "project" / str(project_id) / "packages" / package_name


def package_attributes_path(wd: str | Path, project_id: int, package_name: str) -> Path:
    return package_path(wd, project_id, package_name) / PACKAGE_ATTRIBUTES_FILENAME
