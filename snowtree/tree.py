"""Declaration of the test tree."""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import overload

from snowtree.defer import case_running
from snowtree.models.node import Action, Case, Group, Node

log = logging.getLogger(__name__)


class DeclarationError(RuntimeError):
    """Raised when a group or case is declared while cases are running."""


@dataclass(kw_only=True)
class TestTree:
    """Builds the tree of groups and cases, in declaration order.

    Declaring a group runs its body immediately; groups and cases declared
    inside that body become its children. Declarations made outside any group
    land in ``roots``.
    """

    __test__ = False

    roots: list[Node] = field(default_factory=list)
    _scopes: list[Group] = field(default_factory=list, repr=False)

    @overload
    def describe(self, name: str) -> Callable[[Action], Group]: ...

    @overload
    def describe(self, name: str, body: Action) -> Group: ...

    def describe(
        self, name: str, body: Action | None = None
    ) -> Group | Callable[[Action], Group]:
        """Declare a group and run ``body`` to populate it.

        Usable as a call, ``describe("vector", body)``, or as a decorator,
        ``@describe("vector")``.
        """
        if body is None:
            return lambda decorated: self.describe(name, decorated)

        group = Group(name=name, action=body)
        self._append(group)
        self._scopes.append(group)
        try:
            body()
        finally:
            self._scopes.pop()
        log.debug("Declared group %r with %d child(ren)", name, len(group.children))
        return group

    @overload
    def it(self, name: str) -> Callable[[Action], Case]: ...

    @overload
    def it(self, name: str, body: Action) -> Case: ...

    def it(
        self, name: str, body: Action | None = None
    ) -> Case | Callable[[Action], Case]:
        """Declare a case in the current group. The body runs later."""
        if body is None:
            return lambda decorated: self.it(name, decorated)

        case = Case(name=name, action=body)
        self._append(case)
        return case

    test = it

    def _append(self, node: Node) -> None:
        if case_running():
            raise DeclarationError(
                f"Cannot declare {node.name!r} while a case is running"
            )
        if self._scopes:
            self._scopes[-1].children.append(node)
        else:
            self.roots.append(node)


default_tree = TestTree()
