from __future__ import annotations

import typer

from shipfw.cli.context import build_context
from shipfw.core.errors import ErrorCode
from shipfw.output.console import ConsoleProtocol, Style
from shipfw.release.checks import CheckResult, CheckStatus, ios_validators


def _print_result(result: CheckResult, console: ConsoleProtocol) -> None:
    match result.status:
        case CheckStatus.OK:
            console.success(f"{result.name}: {result.message}")
        case CheckStatus.WARNING:
            console.warning(f"{result.name}: {result.message}")
        case CheckStatus.ERROR:
            console.error(f"{result.name}: {result.message}")
    if result.hint and result.status != CheckStatus.OK:
        console.print(f"  hint: {result.hint}", Style.DIM)


def doctor() -> None:
    """Check that this machine can build and publish iOS framework releases."""
    ctx = build_context()
    console = ctx.console

    has_errors = False
    for validator in ios_validators(flutter_dir=ctx.config.flutter.dir):
        console.header(validator.description)
        for result in validator.validate():
            _print_result(result, console)
            has_errors = has_errors or result.is_error

    console.header("account")
    if ctx.credentials is None:
        console.error("not logged in")
        has_errors = True
    else:
        console.success("token configured")

    console.header("project")
    if ctx.project.is_initialized():
        console.success(str(ctx.project.root))
    else:
        console.warning(f"{ctx.project.root} is not an initialized Flutter module")

    if has_errors:
        raise typer.Exit(code=int(ErrorCode.CONFIG))
