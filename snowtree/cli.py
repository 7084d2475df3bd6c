"""Command line entry point for running a declared test tree."""

import argparse
import logging
import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from importlib.metadata import version
from pathlib import Path
from typing import Any, NoReturn, TextIO

from snowtree.config import ConfigError, RunConfig
from snowtree.engine import TestRunner
from snowtree.models.node import Node
from snowtree.reporters.console import ConsoleReporter
from snowtree.tree import TestTree, default_tree

EXIT_CONFIG_ERROR = 2

log = logging.getLogger(__name__)


class _VersionAction(argparse.Action):
    """Print the installed snowtree version and exit.

    The version is looked up only when the flag is given.
    """

    def __init__(
        self, option_strings: Sequence[str], dest: str, **kwargs: Any
    ) -> None:
        super().__init__(
            option_strings,
            dest=argparse.SUPPRESS,
            default=argparse.SUPPRESS,
            nargs=0,
            **kwargs,
        )

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: object,
        option_string: str | None = None,
    ) -> NoReturn:
        sys.stdout.write(f"{parser.prog} (snowtree {version('snowtree')})\n")
        parser.exit()


def build_parser(prog: str | None = None) -> argparse.ArgumentParser:
    """Create the argument parser for test executables."""
    parser = argparse.ArgumentParser(prog=prog, description="Run the declared tests")
    parser.add_argument(
        "-v",
        "--version",
        action=_VersionAction,
        help="Show the snowtree version and exit",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Only print failed tests and the total",
    )
    parser.add_argument(
        "-t",
        "--timer",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Print the time each test took (default: on)",
    )
    parser.add_argument(
        "-c",
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Color the output (default: on for terminals)",
    )
    parser.add_argument(
        "-m",
        "--maybes",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Announce each test before running it (default: on for terminals)",
    )
    parser.add_argument(
        "--cr",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Overwrite announcements with results (default: on for terminals)",
    )
    parser.add_argument(
        "-l",
        "--log",
        type=Path,
        default=None,
        metavar="FILE",
        help="Write output to FILE instead of stdout",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log engine activity to stderr",
    )
    parser.add_argument(
        "groups",
        nargs="*",
        metavar="GROUP",
        help="Only run the top-level groups with these names",
    )
    return parser


def config_from_args(args: argparse.Namespace, interactive: bool) -> RunConfig:
    """Resolve parsed flags into a run configuration."""
    return RunConfig.resolve(
        interactive=interactive,
        color=args.color,
        quiet=args.quiet,
        timer=args.timer,
        maybes=args.maybes,
        cr=args.cr,
        log_file=args.log,
    )


def select_nodes(nodes: Sequence[Node], names: Sequence[str]) -> Sequence[Node]:
    """Keep only the top-level nodes named in ``names``, in declaration order.

    Raises:
        ConfigError: If a name matches no top-level node

    """
    if not names:
        return nodes

    declared = {node.name for node in nodes}
    if unknown := [name for name in names if name not in declared]:
        raise ConfigError(f"No top-level test group named: {', '.join(unknown)}")
    return [node for node in nodes if node.name in names]


@contextmanager
def open_output(config: RunConfig) -> Iterator[TextIO]:
    """Yield the stream reporter output goes to.

    Raises:
        ConfigError: If the log file cannot be opened

    """
    if config.log_file is None:
        yield sys.stdout
        return

    try:
        stream = config.log_file.open("w", encoding="utf-8")
    except OSError as exc:
        raise ConfigError(
            f"Cannot open log file {config.log_file}: {exc.strerror}"
        ) from exc

    with stream:
        yield stream


def run(config: RunConfig, nodes: Sequence[Node]) -> int:
    """Run the given nodes and return the exit code.

    Returns:
        0 if every case passed, 1 otherwise

    """
    with open_output(config) as stream:
        reporter = ConsoleReporter(config, stream)
        summary = TestRunner(reporter=reporter).run(nodes)

    return 0 if summary.succeeded else 1


def main(argv: Sequence[str] | None = None, tree: TestTree | None = None) -> NoReturn:
    """Parse the command line, run the tree and exit with its status."""
    if tree is None:
        tree = default_tree
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = config_from_args(args, interactive=sys.stdout.isatty())
        nodes = select_nodes(tree.roots, args.groups)
        exit_code = run(config, nodes)
    except ConfigError as exc:
        log.error("%s", exc)
        sys.exit(EXIT_CONFIG_ERROR)

    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
