"""Console reporter rendering indented, optionally colored results."""

import sys
from typing import TextIO

from rich.console import Console
from rich.text import Text

from snowtree.config import RunConfig
from snowtree.models.node import Case, Group
from snowtree.models.result import ExecutionResult, RunSummary
from snowtree.reporters.base import Reporter

INDENT = "    "

SUCCESS_MARKER = "✓"
FAILURE_MARKER = "✕"
MAYBE_MARKER = "?"

_SUCCESS_STYLE = "green"
_FAILURE_STYLE = "red"
_MAYBE_STYLE = "yellow"
_HEADER_STYLE = "bold"

_MS_PER_SECOND = 1000.0


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time, in milliseconds below one second."""
    if seconds < 1:
        return f"{seconds * _MS_PER_SECOND:.2f}ms"
    return f"{seconds:.2f}s"


def summary_line(summary: RunSummary) -> str:
    return f"Total: Passed {summary.passed}/{summary.total} tests"


def single_line(message: str) -> str:
    """Join a multi-line message so a failure stays on one output line."""
    return " | ".join(message.splitlines())


class ConsoleReporter(Reporter):
    """Writes one line per event to a text stream.

    Quiet mode keeps only failed cases and the final total. With maybes on,
    each case is announced before it runs; with cr on the announcement ends in
    a carriage return and the result line overwrites it.
    """

    def __init__(self, config: RunConfig, file: TextIO | None = None) -> None:
        """Initialize the reporter for the given stream (stdout by default)."""
        self.config = config
        self.console = Console(
            file=sys.stdout if file is None else file,
            force_terminal=config.color,
            color_system="standard" if config.color else None,
            no_color=not config.color,
            markup=False,
            emoji=False,
            highlight=False,
            soft_wrap=True,
        )

    def group_entered(self, group: Group, depth: int) -> None:
        if self.config.quiet:
            return
        self._line(depth, Text(f"Testing {group.name}:", style=_HEADER_STYLE))

    def group_exited(self, group: Group, depth: int, summary: RunSummary) -> None:
        if self.config.quiet:
            return
        self._line(
            depth,
            Text(f"{group.name}: Passed {summary.passed}/{summary.total} tests."),
        )
        if depth == 0:
            self.console.print()

    def case_started(self, case: Case, depth: int) -> None:
        if self.config.quiet or not self.config.maybes:
            return
        self._line(
            depth,
            Text.assemble((MAYBE_MARKER, _MAYBE_STYLE), f" Testing: {case.name}"),
            end="\r" if self.config.cr else "\n",
        )

    def case_finished(self, case: Case, depth: int, result: ExecutionResult) -> None:
        if result.passed:
            if self.config.quiet:
                return
            text = Text.assemble(
                (SUCCESS_MARKER, _SUCCESS_STYLE), f" Success: {case.name}"
            )
        else:
            text = Text.assemble(
                (FAILURE_MARKER, _FAILURE_STYLE), f" Failed:  {case.name}"
            )

        if self.config.timer:
            text.append(f" ({format_elapsed(result.elapsed)})")
        if not result.passed:
            text.append(f": {single_line(result.message or '')}")
        self._line(depth, text)

    def run_finished(self, summary: RunSummary) -> None:
        self.console.print(Text(summary_line(summary)))

    def _line(self, depth: int, text: Text, end: str = "\n") -> None:
        self.console.print(Text(INDENT * depth) + text, end=end)
