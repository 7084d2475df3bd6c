"""Models for test execution results."""

from dataclasses import dataclass
from typing import Literal


@dataclass(frozen=True, kw_only=True)
class ExecutionResult:
    """Result of a single case execution.

    Contains only the outcome; the caller knows which case it belongs to.
    """

    status: Literal["pass", "fail"]
    elapsed: float
    message: str | None = None

    @property
    def passed(self) -> bool:
        return self.status == "pass"


@dataclass(kw_only=True)
class RunSummary:
    """Pass/total counters for a run or a part of one."""

    passed: int = 0
    total: int = 0

    @property
    def failed(self) -> int:
        return self.total - self.passed

    @property
    def succeeded(self) -> bool:
        """Whether every counted case passed."""
        return self.passed == self.total

    def record(self, result: ExecutionResult) -> None:
        """Count one finished case."""
        self.total += 1
        if result.passed:
            self.passed += 1
