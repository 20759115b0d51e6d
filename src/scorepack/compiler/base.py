"""Request and asset types shared by the builder and the compiler client."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from scorepack.compiler.kinds import ArtifactKind, ContentKind, ModelKind


@dataclass(frozen=True)
class ModelAsset:
    """Primary model file to upload.

    Attributes:
        path: Location of the model file
        content_kind: Multipart field the file is sent under
    """

    path: Path
    content_kind: ContentKind


@dataclass(frozen=True)
class BuildRequest:
    """Identifies one artifact build.

    Attributes:
        project_id: Project owning the model (and the Python package, if any)
        model_id: Numeric model identifier
        model_name: Logical model name used for file naming
        artifact_kind: Artifact to produce (jar, war, pywar)
        model_kind: Format of the primary model asset (pojo, mojo)
        package_name: Python scoring package, only used for pywar builds
    """

    project_id: int
    model_id: int
    model_name: str
    artifact_kind: ArtifactKind | str
    model_kind: ModelKind | str
    package_name: str = ""
