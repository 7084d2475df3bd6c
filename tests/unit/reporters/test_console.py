"""Tests for the console reporter."""

import io
from itertools import count

import pytest

from snowtree.assertions import fail
from snowtree.config import RunConfig
from snowtree.engine import TestRunner
from snowtree.models.node import Case, Group
from snowtree.models.result import ExecutionResult, RunSummary
from snowtree.reporters.console import ConsoleReporter, format_elapsed
from snowtree.tree import TestTree

PLAIN = RunConfig(color=False, quiet=False, timer=False, maybes=False, cr=False)


def _case(name: str) -> Case:
    return Case(name=name, action=lambda: None)


def _render(config: RunConfig, tree: TestTree) -> str:
    stream = io.StringIO()
    reporter = ConsoleReporter(config, stream)
    TestRunner(reporter=reporter, clock=count(0.0, 0.002).__next__).run(tree.roots)
    return stream.getvalue()


@pytest.fixture
def mixed_tree() -> TestTree:
    """Create a tree with 5 passing and 2 failing cases."""
    tree = TestTree()

    @tree.describe("math")
    def _() -> None:
        tree.it("adds", lambda: None)
        tree.it("subtracts", lambda: fail("2 - 1 was %d", 3))

        @tree.describe("division")
        def _() -> None:
            tree.it("divides", lambda: None)
            tree.it("rounds", lambda: fail("rounded up"))
            tree.it("keeps sign", lambda: None)

    @tree.describe("strings")
    def _() -> None:
        tree.it("joins", lambda: None)
        tree.it("splits", lambda: None)

    return tree


@pytest.mark.parametrize(
    ("seconds", "expected"),
    [
        (0.0, "0.00ms"),
        (0.00125, "1.25ms"),
        (0.5, "500.00ms"),
        (1.0, "1.00s"),
        (2.5, "2.50s"),
    ],
)
def test_format_elapsed(seconds: float, expected: str) -> None:
    """Formats sub-second times in milliseconds."""
    assert format_elapsed(seconds) == expected


def test_renders_indented_tree(mixed_tree: TestTree) -> None:
    """Prints headers, results and footers indented by depth."""
    output = _render(PLAIN, mixed_tree)

    assert output == (
        "Testing math:\n"
        "    ✓ Success: adds\n"
        "    ✕ Failed:  subtracts: 2 - 1 was 3\n"
        "    Testing division:\n"
        "        ✓ Success: divides\n"
        "        ✕ Failed:  rounds: rounded up\n"
        "        ✓ Success: keeps sign\n"
        "    division: Passed 2/3 tests.\n"
        "math: Passed 3/5 tests.\n"
        "\n"
        "Testing strings:\n"
        "    ✓ Success: joins\n"
        "    ✓ Success: splits\n"
        "strings: Passed 2/2 tests.\n"
        "\n"
        "Total: Passed 5/7 tests\n"
    )


def test_quiet_prints_only_failures_and_total(mixed_tree: TestTree) -> None:
    """Keeps the failure lines and the summary line only."""
    config = RunConfig(color=False, quiet=True, timer=True, maybes=True, cr=True)

    lines = _render(config, mixed_tree).splitlines()

    assert lines == [
        "    ✕ Failed:  subtracts (2.00ms): 2 - 1 was 3",
        "        ✕ Failed:  rounds (2.00ms): rounded up",
        "Total: Passed 5/7 tests",
    ]


def test_timer_appends_elapsed_time() -> None:
    """Adds the elapsed time after the case name."""
    stream = io.StringIO()
    config = PLAIN.model_copy(update={"timer": True})
    reporter = ConsoleReporter(config, stream)

    reporter.case_finished(
        _case("fast"), 0, ExecutionResult(status="pass", elapsed=0.00125)
    )
    reporter.case_finished(
        _case("slow"),
        1,
        ExecutionResult(status="fail", elapsed=2.5, message="too slow"),
    )

    assert stream.getvalue() == (
        "✓ Success: fast (1.25ms)\n    ✕ Failed:  slow (2.50s): too slow\n"
    )


def test_maybes_announce_cases_on_own_line() -> None:
    """Prints a provisional line before the result without cr."""
    stream = io.StringIO()
    reporter = ConsoleReporter(PLAIN.model_copy(update={"maybes": True}), stream)

    reporter.case_started(_case("a"), 1)
    reporter.case_finished(_case("a"), 1, ExecutionResult(status="pass", elapsed=0))

    assert stream.getvalue() == "    ? Testing: a\n    ✓ Success: a\n"


def test_cr_overwrites_announcement() -> None:
    """Ends the provisional line with a carriage return."""
    stream = io.StringIO()
    config = PLAIN.model_copy(update={"maybes": True, "cr": True})
    reporter = ConsoleReporter(config, stream)

    reporter.case_started(_case("a"), 0)
    reporter.case_finished(_case("a"), 0, ExecutionResult(status="pass", elapsed=0))

    assert stream.getvalue() == "? Testing: a\r✓ Success: a\n"


def test_no_announcement_without_maybes() -> None:
    """Ignores case start events when maybes are off."""
    stream = io.StringIO()
    reporter = ConsoleReporter(PLAIN, stream)

    reporter.case_started(_case("a"), 0)

    assert stream.getvalue() == ""


def test_empty_group_prints_header_and_zero_footer() -> None:
    """Reports an empty group with zero counts."""
    stream = io.StringIO()
    reporter = ConsoleReporter(PLAIN, stream)
    group = Group(name="empty")

    reporter.group_entered(group, 1)
    reporter.group_exited(group, 1, RunSummary())

    assert stream.getvalue() == "    Testing empty:\n    empty: Passed 0/0 tests.\n"


def test_color_marks_success_and_failure() -> None:
    """Wraps markers in ANSI colors when color is on."""
    stream = io.StringIO()
    reporter = ConsoleReporter(PLAIN.model_copy(update={"color": True}), stream)

    reporter.case_finished(_case("a"), 0, ExecutionResult(status="pass", elapsed=0))
    reporter.case_finished(
        _case("b"), 0, ExecutionResult(status="fail", elapsed=0, message="x")
    )

    output = stream.getvalue()
    assert "\x1b[32m✓" in output
    assert "\x1b[31m✕" in output


def test_no_escape_codes_without_color(mixed_tree: TestTree) -> None:
    """Writes plain text when color is off."""
    assert "\x1b[" not in _render(PLAIN, mixed_tree)


def test_names_are_not_treated_as_markup() -> None:
    """Prints bracketed names literally."""
    stream = io.StringIO()
    reporter = ConsoleReporter(PLAIN, stream)

    reporter.case_finished(
        _case("[bold]literal[/bold]"), 0, ExecutionResult(status="pass", elapsed=0)
    )

    assert stream.getvalue() == "✓ Success: [bold]literal[/bold]\n"


def test_multi_line_failure_stays_on_one_line() -> None:
    """Joins message lines so quiet output keeps one line per failure."""
    tree = TestTree()

    @tree.describe("group")
    def _() -> None:
        tree.it("case", lambda: fail("line one\nline two"))

    config = RunConfig(color=False, quiet=True, timer=False, maybes=False, cr=False)

    lines = _render(config, tree).splitlines()

    assert lines == [
        "    ✕ Failed:  case: line one | line two",
        "Total: Passed 0/1 tests",
    ]
