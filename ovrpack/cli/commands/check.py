"""Check command - verify the Oculus CLI and Android SDK are in place."""

from __future__ import annotations

import os
from pathlib import Path

import typer

from ovrpack.cli.commands._helpers import exit_with_code
from ovrpack.cli.context import build_context
from ovrpack.core.config import Config
from ovrpack.core.errors import ErrorCode
from ovrpack.output.console import ConsoleProtocol


def find_problems(config: Config) -> list[str]:
    """Return one message per missing or unusable configured path."""
    problems: list[str] = []
    cli_path = config.oculus.cli_path
    if not cli_path.is_file():
        problems.append(f"Oculus CLI not found: {cli_path}")
    elif os.name != "nt" and not os.access(cli_path, os.X_OK):
        problems.append(f"Oculus CLI is not executable: {cli_path}")

    sdk_path = config.oculus.android_sdk_path
    if not sdk_path.is_dir():
        problems.append(f"Android SDK directory not found: {sdk_path}")
    return problems


def report(config: Config, console: ConsoleProtocol) -> bool:
    problems = find_problems(config)
    for problem in problems:
        console.error(problem)
    if not problems:
        console.success(f"Oculus CLI: {config.oculus.cli_path}")
        console.success(f"Android SDK: {config.oculus.android_sdk_path}")
    return not problems


def check(
    config: Path | None = typer.Option(
        None, "--config", help="Config file (default: $OVRPACK_CONFIG or ./ovrpack.toml)",
        show_default=False,
    ),
) -> None:
    """Check that the configured Oculus CLI and Android SDK exist."""
    ctx = build_context(config)
    if not report(ctx.config, ctx.console):
        exit_with_code(int(ErrorCode.ENV_ERROR))
