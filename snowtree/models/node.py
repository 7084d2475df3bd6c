"""Nodes of the declared test tree."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

type Action = Callable[[], object]


@dataclass(kw_only=True)
class Group:
    """A named collection of nested groups and cases.

    The declaring ``action`` has already run by the time a group is part of a
    tree: ``children`` is fully populated, in declaration order.
    """

    name: str
    action: Action | None = None
    children: list["Node"] = field(default_factory=list)


@dataclass(frozen=True, kw_only=True)
class Case:
    """A named leaf unit of test logic."""

    name: str
    action: Action


type Node = Group | Case


def count_cases(nodes: Iterable[Node]) -> int:
    """Count the leaf cases below the given nodes."""
    return sum(
        count_cases(node.children) if isinstance(node, Group) else 1
        for node in nodes
    )
