"""Artifact resolver: turns model identifiers into a compiled artifact on disk.

A target artifact that already exists is returned as-is: presence on disk is
the whole caching policy. There is no freshness check, so changing a model's
files without changing its id or name will not trigger a rebuild.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

from scorepack.compiler.base import BuildRequest, ModelAsset
from scorepack.compiler.client import DEFAULT_PING_TIMEOUT_S, DEFAULT_TIMEOUT_S, CompilerClient
from scorepack.compiler.kinds import ArtifactKind, ModelKind, parse_artifact_kind, parse_model_kind
from scorepack.compiler.packages import resolve_python_files
from scorepack.fs import layout

logger = logging.getLogger(__name__)


class BuildLocks:
    """Process-wide registry of one lock per (model_id, artifact_kind).

    An entry lives only while some caller holds or waits for its lock.
    """

    def __init__(self):
        self._guard = threading.Lock()
        # key -> [lock, number of holders and waiters]
        self._entries: dict[tuple[int, ArtifactKind], list] = {}

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)

    @contextmanager
    def hold(self, model_id: int, artifact_kind: ArtifactKind) -> Iterator[None]:
        """Hold the lock for one key, dropping the entry once nobody needs it."""
        key = (model_id, artifact_kind)
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = [threading.Lock(), 0]
            entry[1] += 1
        try:
            with entry[0]:
                yield
        finally:
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    del self._entries[key]


_BUILD_LOCKS = BuildLocks()


class ArtifactBuilder:
    """Builds artifacts through a compiler service, caching them in a working directory."""

    def __init__(
        self,
        address: str,
        working_dir: str | Path,
        client: CompilerClient | None = None,
        timeout_s: float | None = DEFAULT_TIMEOUT_S,
        ping_timeout_s: float | None = DEFAULT_PING_TIMEOUT_S,
        locks: BuildLocks | None = None,
    ):
        """Initialize builder.

        Args:
            address: Compiler service address
            working_dir: Working directory root holding models and packages
            client: Compiler client to use; one is created per build if None
            timeout_s: Build request timeout for created clients
            ping_timeout_s: Liveness probe timeout for created clients
            locks: Lock registry (defaults to the process-wide one)
        """
        self.address = address
        self.working_dir = Path(working_dir)
        self.client = client
        self.timeout_s = timeout_s
        self.ping_timeout_s = ping_timeout_s
        self.locks = locks if locks is not None else _BUILD_LOCKS

    def build(self, request: BuildRequest) -> Path:
        """Return the artifact for request, building it if it is not on disk.

        Raises:
            UnsupportedKindError: Unknown artifact or model kind
            ServiceUnreachableError: Liveness probe failed
            InvalidPackageError: Python package could not be resolved
            AttachmentError: An input file could not be opened
            CompileRequestError: Compile request failed
            ArtifactWriteError: Artifact could not be written
        """
        artifact_kind = parse_artifact_kind(request.artifact_kind)
        model_kind = parse_model_kind(request.model_kind)
        wd = self.working_dir

        dependency_path = layout.model_dependency_path(wd, request.model_id)
        model_asset = ModelAsset(
            path=layout.model_asset_path(wd, request.model_id, request.model_name, model_kind),
            content_kind=model_kind.content_kind,
        )
        target_path = layout.artifact_path(wd, request.model_id, request.model_name, artifact_kind)

        if target_path.exists():
            logger.info(f"Using cached artifact {target_path}")
            return target_path

        with self.locks.hold(request.model_id, artifact_kind):
            # Another caller may have finished the same build while we waited
            if target_path.exists():
                logger.info(f"Using cached artifact {target_path}")
                return target_path

            if self.client is not None:
                self._compile(self.client, request, artifact_kind, dependency_path, model_asset, target_path)
            else:
                with CompilerClient(
                    self.address, timeout_s=self.timeout_s, ping_timeout_s=self.ping_timeout_s
                ) as client:
                    self._compile(client, request, artifact_kind, dependency_path, model_asset, target_path)

        return target_path

    def _compile(
        self,
        client: CompilerClient,
        request: BuildRequest,
        artifact_kind: ArtifactKind,
        dependency_path: Path,
        model_asset: ModelAsset,
        target_path: Path,
    ) -> None:
        client.ping()

        package_name = (request.package_name or "").strip()
        python_main_path: Path | None = None
        python_aux_paths: list[Path] = []
        if artifact_kind is ArtifactKind.PYTHON_WAR and package_name:
            python_main_path, python_aux_paths = resolve_python_files(
                self.working_dir, request.project_id, package_name
            )

        logger.info(
            f"Building {artifact_kind.value} for model {request.model_id} "
            f"({request.model_name}, {model_asset.content_kind.value})"
        )
        client.submit(
            client.url_for(artifact_kind.slug),
            target_path,
            dependency_path,
            python_main_path,
            model_asset,
            python_aux_paths,
        )


def resolve_and_build(
    address: str,
    working_dir: str | Path,
    project_id: int,
    model_id: int,
    model_name: str,
    artifact_kind: ArtifactKind | str,
    model_kind: ModelKind | str,
    package_name: str = "",
    client: CompilerClient | None = None,
) -> Path:
    """Build (or fetch from cache) one artifact and return its path."""
    builder = ArtifactBuilder(address, working_dir, client=client)
    return builder.build(
        BuildRequest(
            project_id=project_id,
            model_id=model_id,
            model_name=model_name,
            artifact_kind=artifact_kind,
            model_kind=model_kind,
            package_name=package_name,
        )
    )
