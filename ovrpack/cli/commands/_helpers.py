"""Shared helpers for CLI commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, NoReturn, TypeVar

import typer

from ovrpack.core.errors import ErrorCode
from ovrpack.core.result import Err, Result
from ovrpack.output.console import Style

if TYPE_CHECKING:
    from ovrpack.output.console import ConsoleProtocol


T = TypeVar("T")
E = TypeVar("E")


def value_or_exit(
    result: Result[T, E],
    console: ConsoleProtocol,
    error_code: ErrorCode = ErrorCode.USER_ERROR,
) -> T:
    """Return the Ok value, or report the error and exit.

    Expects error objects to have a 'message' attribute and optionally a
    'field' naming the offending input.
    """
    if isinstance(result, Err):
        error = result.error
        message: str = getattr(error, "message", str(error))
        field: str | None = getattr(error, "field", None)
        console.error(message)
        if field:
            console.print(f"field: {field}", Style.DIM)
        raise typer.Exit(code=int(error_code))
    return result.value


def exit_with_code(code: int) -> NoReturn:
    raise typer.Exit(code=code)
