from __future__ import annotations

from typing import NoReturn

import typer

from devkit.core.errors import ErrorCode
from devkit.release.errors import ReleaseError


def exit_release(err: str, *, code: ErrorCode) -> NoReturn:
    typer.echo(f"error: {err}", err=True)
    raise typer.Exit(code=int(code))


def release_error_code(kind: str) -> ErrorCode:
    if kind in {"gh_missing", "gh_auth_required"}:
        return ErrorCode.ENV_ERROR
    if kind in {"network", "invalid_payload"}:
        return ErrorCode.NETWORK_ERROR
    return ErrorCode.USER_ERROR


def exit_release_error(error: ReleaseError) -> NoReturn:
    exit_release(error.pretty(), code=release_error_code(error.kind))
