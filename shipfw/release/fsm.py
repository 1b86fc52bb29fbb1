"""Forward-only step machine.

Each handler receives the current state and either advances to a new state
or finishes. States are ordered by ``rank``; a handler that tries to move
backwards, or to stay in place, is a programming error reported as
``StepOrderError``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar, Union

from shipfw.core.result import Err, Ok, Result

S = TypeVar("S")
K = TypeVar("K")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class StepAdvance(Generic[S]):
    state: S


@dataclass(frozen=True, slots=True)
class StepFinish(Generic[S]):
    state: S


StepOutcome: TypeAlias = Union[StepAdvance[S], StepFinish[S]]


class StepOrderError(RuntimeError):
    pass


def advance(state: S) -> StepAdvance[S]:
    return StepAdvance(state=state)


def finish(state: S) -> StepFinish[S]:
    return StepFinish(state=state)


def run_state_machine(
    *,
    initial_state: S,
    get_step: Callable[[S], K],
    rank: Callable[[K], int],
    handlers: Mapping[K, Callable[[S], Result[StepOutcome[S], E]]],
    on_enter: Callable[[S], None] | None = None,
) -> Result[S, E]:
    """Run handlers until one finishes or fails; return the final state."""
    current = initial_state
    if on_enter is not None:
        on_enter(current)

    while True:
        step = get_step(current)
        handler = handlers.get(step)
        if handler is None:
            raise StepOrderError(f"no handler for step: {step}")

        outcome = handler(current)
        if isinstance(outcome, Err):
            return outcome

        nxt = outcome.value.state
        if rank(get_step(nxt)) <= rank(step):
            raise StepOrderError(f"backward transition: {step} -> {get_step(nxt)}")
        if on_enter is not None:
            on_enter(nxt)

        if isinstance(outcome.value, StepFinish):
            return Ok(nxt)
        current = nxt
