"""Wrapper around the Oculus platform utility (ovr-platform-util create-pwa).

The CLI is closed source and has a few quirks this module works around:

- It takes every option as a single ``--name="value"`` token and rejects
  some flags outright (passing ``app-id`` makes it fail with
  "APKTool at [name] is not executable"), so the command line is built from
  an explicit, ordered flag list.
- It only reads the signing keystore from a file, so the base64 payload is
  staged on disk next to the output for the duration of the call.
- It sometimes exits 0 without writing an APK, so the output file is checked
  after every successful run.

Nothing here retries. Every failure is reported once on the console, where it
is detected, and returned as an ``Err``.
"""

from __future__ import annotations

import base64
import binascii
from dataclasses import dataclass
from pathlib import Path
from uuid import uuid4

from ovrpack.core.config import Config
from ovrpack.core.options import PackageOptions
from ovrpack.core.result import Err, Ok, Result
from ovrpack.output.console import ConsoleProtocol
from ovrpack.platform.files import write_new_bytes
from ovrpack.platform.process import run as run_process
from ovrpack.platform.process import tool_command
from ovrpack.services.package_errors import (
    ExternalToolError,
    IncompleteOutputError,
    PackageError,
    StagingError,
    UnclassifiedError,
)

__all__ = [
    "APK_FILE_NAME",
    "CLI_TIMEOUT_SECONDS",
    "OculusCli",
    "PackageResult",
    "build_command_line",
    "stage_signing_key",
]

APK_FILE_NAME = "output.apk"
CLI_TIMEOUT_SECONDS = 5 * 60.0


@dataclass(frozen=True, slots=True)
class PackageResult:
    """An APK the Oculus CLI produced and that was found on disk."""

    apk_path: Path


def _render_flags(flags: list[tuple[str, str | None]]) -> str:
    parts: list[str] = []
    for name, value in flags:
        if value and value.strip():
            parts.append(f'--{name}="{value}" ')
        else:
            parts.append(f"{name} ")
    return "".join(parts)


def build_command_line(
    options: PackageOptions,
    apk_path: Path,
    signing_key_path: Path | None,
    manifest_file: Path,
    *,
    android_sdk_path: Path,
) -> str:
    """Build the ``create-pwa`` argument string for the Oculus CLI.

    Flags with a value render as ``--name="value"``; flags without one render
    as the bare name. Values are not escaped, so a value containing ``"``
    produces a command line the CLI cannot parse.

    Args:
        options: Validated package options.
        apk_path: Where the CLI should write the APK.
        signing_key_path: The staged keystore, or None when nothing was staged.
        manifest_file: The web manifest content on disk.
        android_sdk_path: Android SDK directory from configuration.

    Returns:
        The argument string, each token followed by a single space.
    """
    flags: list[tuple[str, str | None]] = [
        ("create-pwa", None),
        ("out", str(apk_path)),
        ("android-sdk", str(android_sdk_path)),
        ("manifest-content-file", str(manifest_file)),
        ("web-manifest-url", str(options.manifest_uri)),
        ("package-name", options.package_id),
        # No "app-id": the CLI fails with "APKTool at [name] is not executable".
    ]

    key = options.signing_key
    if key is not None and key.skip_signing:
        flags.append(("skip-sign", None))

    if key is not None and signing_key_path is not None:
        flags += [
            ("keystore", str(signing_key_path)),
            ("ks-pass", key.store_password),
            ("ks-key-alias", key.alias),
            ("key-pass", key.password),
        ]

    return _render_flags(flags)


def stage_signing_key(
    options: PackageOptions,
    output_dir: Path,
    console: ConsoleProtocol,
) -> Result[Path | None, StagingError]:
    """Write the base64 keystore to ``<output_dir>/<uuid>.keystore``.

    Returns:
        Ok(path) for a staged key, Ok(None) when there is nothing to sign
        with (no key, blank payload, or skip_signing), Err(StagingError)
        when the payload is not base64 or the write fails.
    """
    key = options.signing_key
    if key is None:
        return Ok(None)
    if not key.has_keystore:
        return Ok(None)
    if key.skip_signing:
        return Ok(None)

    keystore_path = output_dir / f"{uuid4()}.keystore"
    try:
        keystore_bytes = base64.b64decode("".join(key.keystore_file.split()), validate=True)
        write_new_bytes(keystore_path, keystore_bytes)
    except (binascii.Error, OSError) as e:
        console.error(
            f"Error creating key store file for PWA {options.name} at {options.manifest_uri}: {e}"
        )
        return Err(
            StagingError(name=options.name, manifest_uri=options.manifest_uri, reason=str(e))
        )

    return Ok(keystore_path)


class OculusCli:
    """Runs the Oculus CLI for one package request at a time.

    The instance holds only read-only configuration; concurrent calls are
    safe as long as each uses its own ``output_dir``.
    """

    def __init__(self, *, config: Config, console: ConsoleProtocol) -> None:
        self._config = config
        self._console = console

    def create_apk(
        self,
        options: PackageOptions,
        output_dir: Path,
        manifest_file: Path,
    ) -> Result[PackageResult, PackageError]:
        """Create an APK in ``output_dir`` and verify that it exists.

        Args:
            options: Validated package options.
            output_dir: Request-scoped directory for the key file and the APK.
            manifest_file: Web manifest content already written to disk.
        """
        apk_path = output_dir / APK_FILE_NAME

        staged = stage_signing_key(options, output_dir, self._console)
        if isinstance(staged, Err):
            return staged
        signing_key_path = staged.value

        args = build_command_line(
            options,
            apk_path,
            signing_key_path,
            manifest_file,
            android_sdk_path=self._config.oculus.android_sdk_path,
        )

        try:
            cmd = tool_command(self._config.oculus.cli_path, args)
            result = run_process(cmd, cwd=output_dir, timeout=CLI_TIMEOUT_SECONDS)
        except (OSError, ValueError) as e:
            self._console.error(f"Oculus CLI encountered an error: {e}")
            return Err(UnclassifiedError(reason=str(e)))

        if isinstance(result, Err):
            error = result.error
            self._console.error(f"Oculus CLI encountered an error (exit {error.returncode}).")
            self._console.block("Standard error", error.stderr)
            self._console.block("Standard output", error.stdout)
            return Err(
                ExternalToolError(
                    returncode=error.returncode,
                    stdout=error.stdout,
                    stderr=error.stderr,
                )
            )

        output = result.value
        self._console.info("Oculus CLI process completed successfully.")
        self._console.block("Output", output.stdout)
        if output.stderr.strip():
            self._console.warning(
                "Oculus CLI process completed successfully but output error information."
            )
            self._console.block("Standard error", output.stderr)

        if not apk_path.is_file():
            self._console.error(
                "Oculus CLI claimed it finished successfully, but it didn't produce an APK."
            )
            self._console.block("Standard error", output.stderr)
            self._console.block("Standard output", output.stdout)
            return Err(
                IncompleteOutputError(path=apk_path, stdout=output.stdout, stderr=output.stderr)
            )

        return Ok(PackageResult(apk_path=apk_path))
