from __future__ import annotations

import os

import typer

from shipfw.cli.context import CLIContext, build_context
from shipfw.core.errors import ErrorCode
from shipfw.core.result import Err
from shipfw.output.console import Style
from shipfw.output.errors import failure_exit_code, print_failure
from shipfw.output.prompt import TyperConfirmer
from shipfw.platform.detection import Platform
from shipfw.release.build import BuildCoordinator
from shipfw.release.checks import ios_validators
from shipfw.release.errors import UnsupportedHost
from shipfw.release.http_client import HttpCodePushClient
from shipfw.release.model import BuildOutput, ReleasePlatform
from shipfw.release.preconditions import PreconditionRequirements
from shipfw.release.version import parse_release_version
from shipfw.release.workflow import Stage, WorkflowConfig, WorkflowOrchestrator

release_app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Build and publish releases.",
)

_ADD_TO_APP_DOCS = (
    "https://docs.flutter.dev/add-to-app/ios/project-setup"
    "#option-b---embed-frameworks-in-xcode"
)

_SUPPORTED_HOSTS = (Platform.MACOS,)


def ios_framework_requirements(ctx: CLIContext) -> PreconditionRequirements:
    return PreconditionRequirements(
        supported_platforms=_SUPPORTED_HOSTS,
        check_authenticated=True,
        check_initialized=True,
        validators=ios_validators(flutter_dir=ctx.config.flutter.dir),
    )


def _print_next_steps(ctx: CLIContext, output: BuildOutput) -> None:
    try:
        framework_dir = os.path.relpath(output.framework_dir, ctx.project.root)
    except ValueError:
        framework_dir = str(output.framework_dir)

    console = ctx.console
    console.newline()
    console.success("Published Release!")
    console.newline()
    console.print(
        f"Your next step is to include the .xcframework files in {framework_dir} in your iOS app."
    )
    console.newline()
    console.print("To do this:")
    console.print(
        f"    1. Add the relative path to {framework_dir} to your app's Framework Search Paths"
        " in your Xcode build settings."
    )
    console.print("    2. Embed the App.xcframework and Flutter.framework in your Xcode project.")
    console.newline()
    console.print(f"Instructions for these steps can be found at {_ADD_TO_APP_DOCS}.", Style.DIM)


@release_app.command("ios-framework")
def ios_framework_cmd(
    release_version: str = typer.Option(
        ...,
        "--release-version",
        help='Version of the iOS app that embeds this module (e.g. "1.0.0").',
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="Release without confirmation if there are no errors."
    ),
) -> None:
    """Build and publish an iOS framework release."""
    ctx = build_context()
    if ctx.host not in _SUPPORTED_HOSTS:
        print_failure(UnsupportedHost(host=ctx.host, supported=_SUPPORTED_HOSTS), ctx.console)
        raise typer.Exit(code=int(ErrorCode.UNAVAILABLE))

    version = parse_release_version(release_version)
    if version is None:
        ctx.console.error(f"invalid --release-version: {release_version}")
        raise typer.Exit(code=int(ErrorCode.USAGE))

    ctx.console.warning("iOS framework releases are in alpha.")

    credentials = ctx.credentials
    client = HttpCodePushClient(
        base_url=ctx.config.api.base_url,
        token=credentials.token if credentials is not None else "",
        timeout=ctx.config.api.timeout,
    )
    builder = BuildCoordinator(
        project_root=ctx.project.root,
        flutter_dir=ctx.config.flutter.dir,
    )
    orchestrator = WorkflowOrchestrator.create(
        config=WorkflowConfig(
            project_root=ctx.project.root,
            release_version=str(version),
            platform=ReleasePlatform.IOS,
            force=force,
        ),
        client=client,
        builder=builder,
        confirmer=TyperConfirmer(),
        console=ctx.console,
        host=ctx.host,
        credentials=credentials,
        requirements=ios_framework_requirements(ctx),
    )

    result = orchestrator.run()
    if isinstance(result, Err):
        print_failure(result.error, ctx.console)
        raise typer.Exit(code=int(failure_exit_code(result.error)))

    state = result.value
    if state.stage == Stage.ABORTED_BY_USER:
        raise typer.Exit(code=int(ErrorCode.OK))

    assert state.build_output is not None
    _print_next_steps(ctx, state.build_output)
