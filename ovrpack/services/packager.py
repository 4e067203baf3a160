"""End-to-end packaging of one request.

Each request gets its own working directory, so two requests never share a
manifest file, a staged keystore, or an ``output.apk``. The working
directory (and with it the staged keystore) is removed once the APK has
been copied to its destination.
"""

from __future__ import annotations

import json
import shutil
import tempfile
from dataclasses import replace
from pathlib import Path

from ovrpack.core.config import Config
from ovrpack.core.options import PackageOptions
from ovrpack.core.result import Err, Ok, Result
from ovrpack.output.console import ConsoleProtocol, Style
from ovrpack.platform.files import atomic_write_text
from ovrpack.services.oculus_cli import APK_FILE_NAME, OculusCli, build_command_line
from ovrpack.services.package_errors import PackageError, UnclassifiedError

__all__ = ["MANIFEST_FILE_NAME", "PackageService", "preview_command_line"]

MANIFEST_FILE_NAME = "manifest.json"
_REDACTED = "***"


def preview_command_line(options: PackageOptions, config: Config, *, redact: bool = True) -> str:
    """Return the command line ``package`` would run, without running it.

    Nothing is staged. A placeholder stands in for the keystore path, and
    secrets are replaced by ``***`` unless ``redact`` is False.
    """
    work = Path("<work-dir>")
    key = options.signing_key
    keystore: Path | None = None
    if key is not None and key.has_keystore and not key.skip_signing:
        keystore = work / "<uuid>.keystore"
        if redact:
            key = replace(key, store_password=_REDACTED, password=_REDACTED)

    shown = PackageOptions(
        package_id=options.package_id,
        name=options.name,
        manifest_uri=options.manifest_uri,
        manifest=options.manifest,
        signing_key=key,
    )
    return build_command_line(
        shown,
        work / APK_FILE_NAME,
        keystore,
        work / MANIFEST_FILE_NAME,
        android_sdk_path=config.oculus.android_sdk_path,
    )


class PackageService:
    """Packages PWAs into Meta Quest APKs."""

    def __init__(self, *, config: Config, console: ConsoleProtocol) -> None:
        self._config = config
        self._console = console
        self._cli = OculusCli(config=config, console=console)

    def package(
        self,
        options: PackageOptions,
        destination: Path,
        *,
        keep_work_dir: bool = False,
    ) -> Result[Path, PackageError]:
        """Build the APK and copy it to ``destination/<package_id>.apk``.

        Returns:
            Ok(path) to the copied APK, Err(PackageError) on failure
        """
        try:
            work_dir = self._make_work_dir()
        except OSError as e:
            self._console.error(f"Could not create working directory: {e}")
            return Err(UnclassifiedError(reason=str(e)))

        self._console.print(f"work dir: {work_dir}", Style.DIM)
        try:
            return self._package_in(work_dir, options, destination)
        finally:
            if keep_work_dir:
                self._console.print(f"kept work dir: {work_dir}", Style.DIM)
            else:
                shutil.rmtree(work_dir, ignore_errors=True)

    def _make_work_dir(self) -> Path:
        parent = self._config.work_dir
        if parent is not None:
            parent.mkdir(parents=True, exist_ok=True)
        return Path(tempfile.mkdtemp(prefix="ovrpack-", dir=str(parent) if parent else None))

    def _package_in(
        self,
        work_dir: Path,
        options: PackageOptions,
        destination: Path,
    ) -> Result[Path, PackageError]:
        manifest_file = work_dir / MANIFEST_FILE_NAME
        try:
            atomic_write_text(manifest_file, json.dumps(options.manifest, indent=2))
        except OSError as e:
            self._console.error(f"Could not write manifest file {manifest_file}: {e}")
            return Err(UnclassifiedError(reason=str(e)))

        result = self._cli.create_apk(options, work_dir, manifest_file)
        if isinstance(result, Err):
            return result

        target = destination / f"{options.package_id}.apk"
        try:
            destination.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(result.value.apk_path, target)
        except OSError as e:
            self._console.error(f"Could not copy APK to {target}: {e}")
            return Err(UnclassifiedError(reason=str(e)))

        return Ok(target)
