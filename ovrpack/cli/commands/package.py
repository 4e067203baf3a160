"""Package command - build a Meta Quest APK from an options file."""

from __future__ import annotations

from pathlib import Path

import typer

from ovrpack.cli.commands._helpers import exit_with_code, value_or_exit
from ovrpack.cli.context import build_context
from ovrpack.core.options import load_options
from ovrpack.core.result import Err, Ok
from ovrpack.output.errors import package_error_exit_code, print_package_error
from ovrpack.services.packager import PackageService, preview_command_line


def package(
    options_file: Path = typer.Argument(
        ..., help="Options JSON (packageId, name, manifestUri, manifest, signingKey)"
    ),
    out: Path = typer.Option(Path("."), "--out", "-o", help="Directory receiving the APK"),
    config: Path | None = typer.Option(
        None, "--config", help="Config file (default: $OVRPACK_CONFIG or ./ovrpack.toml)",
        show_default=False,
    ),
    keep_work_dir: bool = typer.Option(
        False, "--keep-work-dir", help="Keep the working directory (contains the staged key)"
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Print the Oculus CLI command line without running it"
    ),
) -> None:
    """Package a PWA as a Meta Quest APK."""
    ctx = build_context(config)
    options = value_or_exit(load_options(options_file), ctx.console)

    if dry_run:
        args = preview_command_line(options, ctx.config)
        typer.echo(f"{ctx.config.oculus.cli_path} {args}")
        return

    service = PackageService(config=ctx.config, console=ctx.console)
    match service.package(options, out, keep_work_dir=keep_work_dir):
        case Ok(apk):
            ctx.console.success(f"packaged {options.name}")
            typer.echo(str(apk))
        case Err(error):
            print_package_error(error, ctx.console)
            exit_with_code(package_error_exit_code(error))
