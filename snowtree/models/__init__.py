"""Data models for the test tree and its results."""

from snowtree.models.node import Case, Group, Node, count_cases
from snowtree.models.result import ExecutionResult, RunSummary

__all__ = ["Case", "ExecutionResult", "Group", "Node", "RunSummary", "count_cases"]
