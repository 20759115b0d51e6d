"""Closed enumerations for artifact builds.

The string values double as the wire protocol of the compiler service:
artifact kinds select an endpoint slug, content kinds name the multipart
fields of an upload.
"""

from __future__ import annotations

from enum import Enum

from scorepack.compiler.errors import UnsupportedKindError


class ContentKind(str, Enum):
    """Multipart field names understood by the compiler service."""

    JAVA_SOURCE = "pojo"
    MODEL_DEPENDENCY = "jar"
    MODEL_BINARY = "mojo"
    PYTHON_MAIN = "python"
    PYTHON_EXTRA = "pythonextra"


class ModelKind(str, Enum):
    """On-disk format of the primary model asset."""

    POJO = "pojo"
    MOJO = "mojo"

    @property
    def content_kind(self) -> ContentKind:
        return _MODEL_CONTENT[self]


class ArtifactKind(str, Enum):
    """Deployable artifact produced by the compiler service."""

    JAR = "jar"
    WAR = "war"
    PYTHON_WAR = "pywar"

    @property
    def slug(self) -> str:
        """Endpoint slug on the compiler service."""
        return _ARTIFACT_SLUGS[self]


_MODEL_CONTENT = {
    ModelKind.POJO: ContentKind.JAVA_SOURCE,
    ModelKind.MOJO: ContentKind.MODEL_BINARY,
}

_ARTIFACT_SLUGS = {
    ArtifactKind.JAR: "compile",
    ArtifactKind.WAR: "makewar",
    ArtifactKind.PYTHON_WAR: "makepythonwar",
}


def _parse(enum_cls, value, label: str):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    supported = ", ".join(m.value for m in enum_cls)
    raise UnsupportedKindError(f"Unsupported {label} {value!r} (supported: {supported})")


def parse_artifact_kind(value: ArtifactKind | str) -> ArtifactKind:
    """Return the ArtifactKind for value, or raise UnsupportedKindError."""
    return _parse(ArtifactKind, value, "artifact kind")


def parse_model_kind(value: ModelKind | str) -> ModelKind:
    """Return the ModelKind for value, or raise UnsupportedKindError."""
    return _parse(ModelKind, value, "model kind")
