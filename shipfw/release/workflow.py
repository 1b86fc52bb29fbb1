"""Release publishing workflow.

Stages run strictly in this order; each one starts only if the previous one
succeeded::

    validating -> app_resolved -> existing_release_checked -> built
        -> confirmed -> release_resolved -> artifact_published -> activated

Declining at the confirmation prompt ends in ``aborted_by_user`` (a success).
Any failure ends the run with the originating ``WorkflowFailure``. Nothing is
retried here; transport retries, if any, belong to the API client.

Guarantees:
- an already-active release for the version aborts the run before building
- no release is created before a successful build and the operator's go-ahead
- activation happens only after the artifact upload succeeded
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from pathlib import Path
from typing import Protocol

from shipfw.core.project import Project
from shipfw.core.result import Err, Ok, Result
from shipfw.output.console import ConsoleProtocol
from shipfw.output.prompt import Confirmer
from shipfw.platform.detection import Platform
from shipfw.release.api import CodePushClient
from shipfw.release.auth import Credentials
from shipfw.release.confirm import ConfirmationGate
from shipfw.release.errors import (
    ApiFailure,
    BuildFailed,
    ProjectNotInitialized,
    RevisionResolutionFailed,
    WorkflowFailure,
)
from shipfw.release.fsm import StepOutcome, advance, finish, run_state_machine
from shipfw.release.model import (
    App,
    BuildOutput,
    Release,
    ReleasePlatform,
    ReleaseSummary,
)
from shipfw.release.preconditions import PreconditionRequirements, PreconditionValidator
from shipfw.release.publish import ArtifactPublisher
from shipfw.release.resolver import ReleaseResolver
from shipfw.release.status import StatusTransitioner


class Stage(Enum):
    VALIDATING = "validating"
    APP_RESOLVED = "app_resolved"
    EXISTING_RELEASE_CHECKED = "existing_release_checked"
    BUILT = "built"
    ABORTED_BY_USER = "aborted_by_user"
    CONFIRMED = "confirmed"
    RELEASE_RESOLVED = "release_resolved"
    ARTIFACT_PUBLISHED = "artifact_published"
    ACTIVATED = "activated"

    def __str__(self) -> str:
        return self.value

    @property
    def rank(self) -> int:
        return _STAGE_ORDER.index(self)


# ABORTED_BY_USER and CONFIRMED are siblings after BUILT; the step machine
# only needs both to rank above BUILT.
_STAGE_ORDER = tuple(Stage)


class Builder(Protocol):
    def build(self, platform: ReleasePlatform) -> Result[BuildOutput, BuildFailed]: ...

    def resolve_toolchain_revision(self) -> Result[str, RevisionResolutionFailed]: ...


@dataclass(frozen=True, slots=True)
class WorkflowConfig:
    """Everything one invocation needs to know about its environment."""

    project_root: Path
    release_version: str
    platform: ReleasePlatform = ReleasePlatform.IOS
    force: bool = False


@dataclass(frozen=True, slots=True)
class WorkflowState:
    stage: Stage = Stage.VALIDATING
    app: App | None = None
    existing_release: Release | None = None
    build_output: BuildOutput | None = None
    confirmed: bool | None = None
    flutter_revision: str | None = None
    release: Release | None = None

    @property
    def succeeded(self) -> bool:
        return self.stage == Stage.ACTIVATED


Step = Result[StepOutcome[WorkflowState], WorkflowFailure]


class WorkflowOrchestrator:
    def __init__(
        self,
        *,
        config: WorkflowConfig,
        client: CodePushClient,
        validator: PreconditionValidator,
        requirements: PreconditionRequirements,
        resolver: ReleaseResolver,
        builder: Builder,
        gate: ConfirmationGate,
        publisher: ArtifactPublisher,
        transitioner: StatusTransitioner,
        console: ConsoleProtocol,
    ) -> None:
        self._config = config
        self._client = client
        self._validator = validator
        self._requirements = requirements
        self._resolver = resolver
        self._builder = builder
        self._gate = gate
        self._publisher = publisher
        self._transitioner = transitioner
        self._console = console
        self.history: list[Stage] = []
        self._failed_stage: Stage | None = None

    @classmethod
    def create(
        cls,
        *,
        config: WorkflowConfig,
        client: CodePushClient,
        builder: Builder,
        confirmer: Confirmer,
        console: ConsoleProtocol,
        host: Platform,
        credentials: Credentials | None,
        requirements: PreconditionRequirements,
    ) -> WorkflowOrchestrator:
        """Wire the standard components around ``client``."""
        return cls(
            config=config,
            client=client,
            validator=PreconditionValidator(
                host=host,
                project=Project(config.project_root),
                credentials=credentials,
                console=console,
            ),
            requirements=requirements,
            resolver=ReleaseResolver(client),
            builder=builder,
            gate=ConfirmationGate(console=console, confirmer=confirmer),
            publisher=ArtifactPublisher(client),
            transitioner=StatusTransitioner(client),
            console=console,
        )

    @property
    def failed_stage(self) -> Stage | None:
        """Stage the last failed run was in when it failed."""
        return self._failed_stage

    def run(self) -> Result[WorkflowState, WorkflowFailure]:
        self.history = []
        self._failed_stage = None
        result = run_state_machine(
            initial_state=WorkflowState(),
            get_step=lambda s: s.stage,
            rank=lambda stage: stage.rank,
            handlers={
                Stage.VALIDATING: self._validate,
                Stage.APP_RESOLVED: self._check_existing_release,
                Stage.EXISTING_RELEASE_CHECKED: self._build,
                Stage.BUILT: self._confirm,
                Stage.CONFIRMED: self._resolve_release,
                Stage.RELEASE_RESOLVED: self._publish,
                Stage.ARTIFACT_PUBLISHED: self._activate,
            },
            on_enter=lambda s: self.history.append(s.stage),
        )
        if isinstance(result, Err):
            self._failed_stage = self.history[-1]
        return result

    # -- stage handlers -------------------------------------------------

    def _validate(self, state: WorkflowState) -> Step:
        valid = self._validator.validate(self._requirements)
        if isinstance(valid, Err):
            return valid

        app_id = Project(self._config.project_root).load_app_id()
        if isinstance(app_id, Err):
            return Err(ProjectNotInitialized(reason=app_id.error.message))

        self._console.step("Fetching app")
        app = self._client.get_app(app_id.value)
        if isinstance(app, Err):
            e = app.error
            return Err(ApiFailure(operation=e.operation, message=e.message, status=e.status))

        return Ok(advance(replace(state, stage=Stage.APP_RESOLVED, app=app.value)))

    def _check_existing_release(self, state: WorkflowState) -> Step:
        assert state.app is not None
        existing = self._resolver.lookup(state.app.app_id, self._config.release_version)
        if isinstance(existing, Err):
            return existing

        if existing.value is not None:
            not_active = self._resolver.ensure_not_active(existing.value, self._config.platform)
            if isinstance(not_active, Err):
                return not_active

        return Ok(
            advance(
                replace(
                    state,
                    stage=Stage.EXISTING_RELEASE_CHECKED,
                    existing_release=existing.value,
                )
            )
        )

    def _build(self, state: WorkflowState) -> Step:
        with self._console.progress(f"Building {self._config.platform} framework"):
            built = self._builder.build(self._config.platform)
        if isinstance(built, Err):
            return built
        self._console.success(f"Built {built.value.artifact_path.name}")
        return Ok(advance(replace(state, stage=Stage.BUILT, build_output=built.value)))

    def _confirm(self, state: WorkflowState) -> Step:
        assert state.app is not None
        summary = ReleaseSummary(
            app=state.app,
            version=self._config.release_version,
            platform=self._config.platform,
        )
        if not self._gate.confirm(summary, forced=self._config.force):
            self._console.info("Aborting.")
            return Ok(finish(replace(state, stage=Stage.ABORTED_BY_USER, confirmed=False)))
        return Ok(advance(replace(state, stage=Stage.CONFIRMED, confirmed=True)))

    def _resolve_release(self, state: WorkflowState) -> Step:
        assert state.app is not None
        self._console.step("Fetching Flutter revision")
        revision = self._builder.resolve_toolchain_revision()
        if isinstance(revision, Err):
            return revision

        release = self._resolver.resolve(
            app_id=state.app.app_id,
            version=self._config.release_version,
            platform=self._config.platform,
            flutter_revision=revision.value,
        )
        if isinstance(release, Err):
            return release

        if state.existing_release is not None:
            self._console.step(f"Reusing draft release {release.value.id}")
        else:
            self._console.step(f"Created release {release.value.id}")

        return Ok(
            advance(
                replace(
                    state,
                    stage=Stage.RELEASE_RESOLVED,
                    flutter_revision=revision.value,
                    release=release.value,
                )
            )
        )

    def _publish(self, state: WorkflowState) -> Step:
        assert state.app is not None and state.release is not None
        assert state.build_output is not None
        self._console.step("Uploading release artifacts")
        published = self._publisher.publish(
            app_id=state.app.app_id,
            release_id=state.release.id,
            build_output=state.build_output,
        )
        if isinstance(published, Err):
            return published
        return Ok(advance(replace(state, stage=Stage.ARTIFACT_PUBLISHED)))

    def _activate(self, state: WorkflowState) -> Step:
        assert state.app is not None and state.release is not None
        self._console.step("Activating release")
        activated = self._transitioner.activate(
            app_id=state.app.app_id,
            release_id=state.release.id,
            platform=self._config.platform,
        )
        if isinstance(activated, Err):
            return activated
        return Ok(finish(replace(state, stage=Stage.ACTIVATED)))
