from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import typer

from ovrpack.core.config import Config, default_config_path, load_config
from ovrpack.core.errors import ErrorCode
from ovrpack.core.result import Err
from ovrpack.output.console import ConsoleProtocol, RichConsole


@dataclass(frozen=True, slots=True)
class CLIContext:
    config: Config
    console: ConsoleProtocol


def build_context(config_path: Path | None = None) -> CLIContext:
    console = RichConsole()
    path = config_path or default_config_path()

    config_result = load_config(path)
    if isinstance(config_result, Err):
        console.error(config_result.error.message)
        raise typer.Exit(code=int(ErrorCode.ENV_ERROR))

    return CLIContext(config=config_result.value, console=console)
