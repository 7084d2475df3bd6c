"""State of the running case: deferred cleanup and the first failure."""

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from snowtree.models.node import Action

log = logging.getLogger(__name__)

_active_scope: ContextVar["CaseScope | None"] = ContextVar(
    "snowtree_active_case_scope", default=None
)


class DeferOutsideCaseError(RuntimeError):
    """Raised when a cleanup action is registered with no case running."""


@dataclass(kw_only=True)
class DeferStack:
    """Cleanup actions registered by one case, run last-in first-out."""

    actions: list[Action] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.actions)

    def push(self, action: Action) -> None:
        self.actions.append(action)

    def drain(self) -> None:
        """Run and discard every action, most recently registered first.

        An action that raises stops the drain and the error propagates.
        """
        if self.actions:
            log.debug("Running %d deferred action(s)", len(self.actions))
        while self.actions:
            action = self.actions.pop()
            action()


@dataclass(kw_only=True)
class CaseScope:
    """Per-case state, live while the case body runs.

    The first failure signal is kept here as well as raised, so the case
    fails even if the body catches the signal.
    """

    defers: DeferStack = field(default_factory=DeferStack)
    failure: str | None = None

    def record_failure(self, message: str) -> None:
        if self.failure is None:
            self.failure = message

    @contextmanager
    def active(self) -> Iterator["CaseScope"]:
        """Make this the scope that ``defer`` and failures report to."""
        token = _active_scope.set(self)
        try:
            yield self
        finally:
            _active_scope.reset(token)


def current_scope() -> CaseScope | None:
    """The scope of the case body currently executing, if any."""
    return _active_scope.get()


def case_running() -> bool:
    """Whether a case body is currently executing."""
    return _active_scope.get() is not None


def defer(action: Callable[..., object], *args: Any, **kwargs: Any) -> None:
    """Schedule ``action(*args, **kwargs)`` to run when the current case ends.

    Actions run in reverse registration order whether the case passes or
    fails. Only actions registered before a failure are run.

    Raises:
        DeferOutsideCaseError: If no case is running.

    """
    scope = _active_scope.get()
    if scope is None:
        raise DeferOutsideCaseError("defer() called outside of a running case")
    scope.defers.push(partial(action, *args, **kwargs) if args or kwargs else action)
