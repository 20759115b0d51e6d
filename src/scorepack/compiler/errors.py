"""Exception types for artifact builds against the remote compiler service."""

from __future__ import annotations

from pathlib import Path


class CompilerError(Exception):
    """Base exception for artifact build errors."""

    pass


class UnsupportedKindError(CompilerError):
    """Artifact kind or model kind is not one of the supported values."""

    pass


class ServiceUnreachableError(CompilerError):
    """Liveness probe against the compiler service failed."""

    pass


class InvalidPackageError(CompilerError):
    """Python scoring package is missing, malformed, or has no main file."""

    pass


class AttachmentError(CompilerError):
    """An input file could not be attached to the compile request.

    Attributes:
        role: What the file represents (model, dependency, python main, ...)
        path: Path of the file that failed
    """

    def __init__(self, role: str, path: str | Path, cause: Exception | None = None):
        self.role = role
        self.path = Path(path)
        message = f"Failed attaching {role} file {self.path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class CompileRequestError(CompilerError):
    """Compile request failed in transport or returned a non-200 status.

    Attributes:
        status_code: HTTP status (None for transport failures)
        body: Response body text (None for transport failures)
    """

    def __init__(self, message: str, status_code: int | None = None, body: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ArtifactWriteError(CompilerError):
    """Compiled artifact could not be written to its target path."""

    def __init__(self, path: str | Path, cause: Exception | None = None):
        self.path = Path(path)
        message = f"Failed writing compiled artifact {self.path}"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)
