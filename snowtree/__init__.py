"""Declare nested groups of test cases and run them in declaration order."""

from snowtree.assertions import (
    CaseFailure,
    asserteq,
    asserteq_buf,
    asserteq_dbl,
    asserteq_int,
    asserteq_ptr,
    asserteq_str,
    assertneq,
    assertneq_buf,
    assertneq_dbl,
    assertneq_int,
    assertneq_ptr,
    assertneq_str,
    check,
    fail,
)
from snowtree.cli import main
from snowtree.config import ConfigError, RunConfig
from snowtree.defer import DeferOutsideCaseError, defer
from snowtree.engine import TestRunner
from snowtree.tree import DeclarationError, TestTree, default_tree

describe = default_tree.describe
it = default_tree.it
test = default_tree.test

__all__ = [
    "CaseFailure",
    "ConfigError",
    "DeclarationError",
    "DeferOutsideCaseError",
    "RunConfig",
    "TestRunner",
    "TestTree",
    "asserteq",
    "asserteq_buf",
    "asserteq_dbl",
    "asserteq_int",
    "asserteq_ptr",
    "asserteq_str",
    "assertneq",
    "assertneq_buf",
    "assertneq_dbl",
    "assertneq_int",
    "assertneq_ptr",
    "assertneq_str",
    "check",
    "default_tree",
    "defer",
    "describe",
    "fail",
    "it",
    "main",
    "test",
]
