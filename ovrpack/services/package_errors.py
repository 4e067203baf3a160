from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class StagingError:
    """The signing keystore could not be decoded or written to disk."""

    name: str
    manifest_uri: str
    reason: str


@dataclass(frozen=True, slots=True)
class ExternalToolError:
    """The Oculus CLI exited with failure, could not start, or timed out."""

    returncode: int
    stdout: str
    stderr: str


@dataclass(frozen=True, slots=True)
class IncompleteOutputError:
    """The Oculus CLI reported success but the APK is not there."""

    path: Path
    stdout: str
    stderr: str


@dataclass(frozen=True, slots=True)
class UnclassifiedError:
    reason: str


PackageError = StagingError | ExternalToolError | IncompleteOutputError | UnclassifiedError
