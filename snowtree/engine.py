"""Execution engine walking the test tree."""

import logging
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from snowtree.assertions import CaseFailure
from snowtree.defer import CaseScope
from snowtree.models.node import Case, Group, Node
from snowtree.models.result import ExecutionResult, RunSummary
from snowtree.reporters.base import Reporter

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class RunContext:
    """State threaded through one traversal."""

    summary: RunSummary
    depth: int = 0

    def descend(self) -> "RunContext":
        return replace(self, depth=self.depth + 1)


@dataclass(frozen=True, kw_only=True)
class TestRunner:
    """Runs declared cases depth-first, in declaration order."""

    __test__ = False

    reporter: Reporter
    clock: Callable[[], float] = time.perf_counter

    def run(self, nodes: Sequence[Node]) -> RunSummary:
        """Run every case below ``nodes`` exactly once.

        Args:
            nodes: Top-level groups and cases, in declaration order

        Returns:
            Pass/total counts for the whole run

        """
        context = RunContext(summary=RunSummary())
        log.info("Running %d top-level node(s)", len(nodes))

        for node in nodes:
            self._visit(node, context)

        summary = context.summary
        log.info("Run completed: passed=%d total=%d", summary.passed, summary.total)
        self.reporter.run_finished(summary)
        return summary

    def _visit(self, node: Node, context: RunContext) -> None:
        if isinstance(node, Group):
            self._run_group(node, context)
        else:
            result = self._run_case(node, context)
            context.summary.record(result)
            self.reporter.case_finished(node, context.depth, result)

    def _run_group(self, group: Group, context: RunContext) -> None:
        self.reporter.group_entered(group, context.depth)
        passed_before = context.summary.passed
        total_before = context.summary.total

        child_context = context.descend()
        for child in group.children:
            self._visit(child, child_context)

        group_summary = RunSummary(
            passed=context.summary.passed - passed_before,
            total=context.summary.total - total_before,
        )
        self.reporter.group_exited(group, context.depth, group_summary)

    def _run_case(self, case: Case, context: RunContext) -> ExecutionResult:
        """Run one case body, then its deferred actions."""
        scope = CaseScope()
        self.reporter.case_started(case, context.depth)
        log.debug("Case started: %s", case.name)
        start = self.clock()

        try:
            with scope.active():
                case.action()
        except CaseFailure as failure:
            scope.record_failure(failure.message)
        except Exception as exc:
            log.debug("Case %r raised", case.name, exc_info=exc)
            scope.record_failure(f"Unexpected {type(exc).__name__}: {exc}")
        finally:
            scope.defers.drain()

        elapsed = self.clock() - start
        message = scope.failure
        log.debug(
            "Case finished: %s status=%s elapsed=%.6fs",
            case.name,
            "fail" if message is not None else "pass",
            elapsed,
        )
        if message is not None:
            return ExecutionResult(status="fail", elapsed=elapsed, message=message)
        return ExecutionResult(status="pass", elapsed=elapsed)
