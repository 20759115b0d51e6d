"""HTTP client for the remote compiler service.

The service exposes GET /ping for liveness and POST /<slug> for builds.
A build request is a multipart form with one part per input file, keyed by
content kind; a 200 response carries the compiled artifact as its body.
"""

from __future__ import annotations

import logging
import os
import tempfile
from contextlib import ExitStack
from pathlib import Path

import httpx

from scorepack.compiler.base import ModelAsset
from scorepack.compiler.errors import (
    ArtifactWriteError,
    AttachmentError,
    CompileRequestError,
    ServiceUnreachableError,
)
from scorepack.compiler.kinds import ContentKind

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_S = 300.0
DEFAULT_PING_TIMEOUT_S = 10.0

# Response body chunk size when streaming an artifact to disk
_CHUNK_SIZE = 65536

# Maximum response body text quoted in error messages
_MAX_ERROR_BODY = 2000


class CompilerClient:
    """Client for the compiler service.

    No retries: a transport failure or non-200 response ends the build attempt.
    """

    def __init__(
        self,
        address: str,
        timeout_s: float | None = DEFAULT_TIMEOUT_S,
        ping_timeout_s: float | None = DEFAULT_PING_TIMEOUT_S,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize compiler client.

        Args:
            address: Service address, "host:port" or a full http(s) base URL
            timeout_s: Timeout for build requests (None disables it)
            ping_timeout_s: Timeout for the liveness probe
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.address = address.strip()
        self.timeout_s = timeout_s
        self.ping_timeout_s = ping_timeout_s
        self.client = httpx.Client(timeout=timeout_s, transport=transport)

    def __enter__(self) -> CompilerClient:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.client.close()

    def url_for(self, slug: str) -> str:
        """Return the service URL for an endpoint slug."""
        if self.address.startswith(("http://", "https://")):
            base = self.address.rstrip("/")
        else:
            base = f"http://{self.address}"
        return f"{base}/{slug.lstrip('/')}"

    def ping(self) -> None:
        """Check that the service answers at all.

        Raises:
            ServiceUnreachableError: Transport failure (status codes are ignored)
        """
        url = self.url_for("ping")
        try:
            response = self.client.get(url, timeout=self.ping_timeout_s)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            raise ServiceUnreachableError(
                f"Could not connect to compiler service at {self.address}: {e}"
            ) from e
        logger.debug(f"Compiler service ping {url}: {response.status_code}")

    def submit(
        self,
        url: str,
        target_path: str | Path,
        dependency_path: str | Path,
        python_main_path: str | Path | None,
        model_asset: ModelAsset,
        python_aux_paths: list[Path] | None = None,
    ) -> None:
        """Upload build inputs and write the compiled artifact to target_path.

        The artifact is streamed into a temporary file next to the target and
        renamed into place only once the whole body has been written, so the
        target is either the complete new artifact or untouched.

        Args:
            url: Build endpoint URL
            target_path: Where the compiled artifact is published
            dependency_path: Model dependency archive
            python_main_path: Python main file, or None/"" for no Python files
            model_asset: Primary model file and its content kind
            python_aux_paths: Auxiliary Python files, sent only with a main file

        Raises:
            AttachmentError: An input file could not be opened
            CompileRequestError: Transport failure or non-200 response
            ArtifactWriteError: Target could not be created or written
        """
        target_path = Path(target_path)

        attachments: list[tuple[ContentKind, Path, str]] = [
            (model_asset.content_kind, Path(model_asset.path), "model"),
            (ContentKind.MODEL_DEPENDENCY, Path(dependency_path), "model dependency"),
        ]
        if python_main_path:
            attachments.append((ContentKind.PYTHON_MAIN, Path(python_main_path), "Python main"))
            for aux in python_aux_paths or []:
                attachments.append((ContentKind.PYTHON_EXTRA, Path(aux), "Python auxiliary"))

        with ExitStack() as stack:
            files = []
            for content_kind, path, role in attachments:
                try:
                    handle = stack.enter_context(path.open("rb"))
                except OSError as e:
                    raise AttachmentError(role, path, e) from e
                files.append(
                    (content_kind.value, (path.name, handle, "application/octet-stream"))
                )

            logger.info(f"Submitting {len(files)} files to {url}")
            try:
                with self.client.stream("POST", url, files=files) as response:
                    if response.status_code != 200:
                        response.read()
                        body = response.text
                        raise CompileRequestError(
                            f"Failed compiling scoring service: "
                            f"{response.status_code} {response.reason_phrase} / "
                            f"{body[:_MAX_ERROR_BODY]}",
                            status_code=response.status_code,
                            body=body,
                        )
                    _publish(response, target_path)
            except (httpx.RequestError, httpx.InvalidURL) as e:
                raise CompileRequestError(f"Failed making compilation request to {url}: {e}") from e

        logger.info(f"Wrote compiled artifact {target_path}")


def _publish(response: httpx.Response, target_path: Path) -> None:
    """Stream a response body to a temp file and rename it onto target_path."""
    try:
        target_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=target_path.parent, prefix=f".{target_path.name}.", suffix=".part"
        )
    except OSError as e:
        raise ArtifactWriteError(target_path, e) from e

    tmp_path = Path(tmp_name)
    published = False
    try:
        try:
            with os.fdopen(fd, "wb") as dst:
                for chunk in response.iter_bytes(chunk_size=_CHUNK_SIZE):
                    dst.write(chunk)
                dst.flush()
                os.fsync(dst.fileno())
            # mkstemp creates 0600 files
            os.chmod(tmp_path, 0o644)
            os.replace(tmp_path, target_path)
        except OSError as e:
            raise ArtifactWriteError(target_path, e) from e
        published = True
    finally:
        if not published:
            tmp_path.unlink(missing_ok=True)
