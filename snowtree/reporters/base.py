"""Abstract base class for run reporters."""

from abc import ABC, abstractmethod

from snowtree.models.node import Case, Group
from snowtree.models.result import ExecutionResult, RunSummary


class Reporter(ABC):
    """Consumer of the events emitted while the engine walks the tree.

    ``depth`` is the nesting level of the node: 0 for top-level declarations.
    """

    @abstractmethod
    def group_entered(self, group: Group, depth: int) -> None:
        """Called before any child of ``group`` runs."""

    @abstractmethod
    def group_exited(self, group: Group, depth: int, summary: RunSummary) -> None:
        """Called after every child of ``group`` ran.

        Args:
            group: The group being left
            depth: Nesting level of the group
            summary: Counts for the cases below this group only

        """

    @abstractmethod
    def case_started(self, case: Case, depth: int) -> None:
        """Called right before the case body runs."""

    @abstractmethod
    def case_finished(self, case: Case, depth: int, result: ExecutionResult) -> None:
        """Called once the case body returned or failed and its defers ran."""

    @abstractmethod
    def run_finished(self, summary: RunSummary) -> None:
        """Called once after the whole tree was walked."""
