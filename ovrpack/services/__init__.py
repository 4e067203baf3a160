"""Application services for ovrpack.

Services implement packaging on top of the domain layer (core/) and the
platform primitives (platform/).
"""

from ovrpack.services.oculus_cli import OculusCli, PackageResult
from ovrpack.services.package_errors import (
    ExternalToolError,
    IncompleteOutputError,
    PackageError,
    StagingError,
    UnclassifiedError,
)
from ovrpack.services.packager import PackageService

__all__ = [
    "OculusCli",
    "PackageResult",
    "PackageService",
    # errors
    "ExternalToolError",
    "IncompleteOutputError",
    "PackageError",
    "StagingError",
    "UnclassifiedError",
]
