"""Workflow failure presentation.

The one place where failure kinds become console text and exit codes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from shipfw.core.errors import ErrorCode
from shipfw.output.console import Style
from shipfw.release.errors import (
    ActivationFailed,
    ApiFailure,
    ArtifactMissing,
    BuildFailed,
    NotAuthenticated,
    ProjectNotInitialized,
    ReleaseAlreadyActive,
    RevisionResolutionFailed,
    UnsupportedHost,
    UploadFailed,
    ValidationFailed,
    WorkflowFailure,
)

if TYPE_CHECKING:
    from shipfw.output.console import ConsoleProtocol

__all__ = ["failure_exit_code", "print_failure"]


def print_failure(failure: WorkflowFailure, console: ConsoleProtocol) -> None:
    match failure:
        case UnsupportedHost(supported=supported):
            names = " or ".join(p.display_name for p in supported)
            console.error(f"This command is only supported on {names}.")
        case NotAuthenticated(hint=hint):
            console.error("You must be logged in to run this command.")
            console.print(f"hint: {hint}", Style.DIM)
        case ProjectNotInitialized(reason=reason, hint=hint):
            console.error(f"Project is not initialized: {reason}")
            console.print(f"hint: {hint}", Style.DIM)
        case ValidationFailed(issues=issues):
            console.error("Aborting due to validation errors.")
            for issue in issues:
                console.print(f"  {issue.name}: {issue.message}", Style.ERROR)
                if issue.hint:
                    console.print(f"    hint: {issue.hint}", Style.DIM)
        case ApiFailure(operation=operation, message=message):
            console.error(f"{operation} failed: {message}")
        case ReleaseAlreadyActive(version=version, platform=platform):
            console.error(
                f"It looks like you have an existing {platform} release for version {version}."
            )
            console.print("Please bump your version number and try again.", Style.DIM)
        case BuildFailed(cause=cause):
            console.error(f"Failed to build iOS framework: {cause}")
        case RevisionResolutionFailed(message=message):
            console.error(message)
        case ArtifactMissing(path=path):
            console.error(f"Build output not found: {path}")
        case UploadFailed(release_id=release_id, message=message):
            console.error(f"Failed to upload artifacts for release {release_id}: {message}")
            console.print(
                "The release is still a draft; re-run the command to retry the upload.",
                Style.DIM,
            )
        case ActivationFailed(release_id=release_id, message=message, ambiguous=ambiguous):
            console.error(f"Failed to activate release {release_id}: {message}")
            if ambiguous:
                console.warning(
                    "The outcome is unknown; the release may or may not be active."
                )
            console.print(
                "Artifacts are uploaded. Verify the release status manually before re-running.",
                Style.DIM,
            )


def failure_exit_code(failure: WorkflowFailure) -> ErrorCode:
    match failure:
        case UnsupportedHost():
            return ErrorCode.UNAVAILABLE
        case NotAuthenticated():
            return ErrorCode.NO_USER
        case ProjectNotInitialized() | ValidationFailed():
            return ErrorCode.CONFIG
        case ReleaseAlreadyActive():
            return ErrorCode.DATA_ERROR
        case ArtifactMissing():
            return ErrorCode.NO_INPUT
        case UploadFailed():
            return ErrorCode.TEMP_FAIL
        case ApiFailure() | BuildFailed() | RevisionResolutionFailed() | ActivationFailed():
            return ErrorCode.SOFTWARE
    # Fallback for exhaustiveness
    return ErrorCode.SOFTWARE
