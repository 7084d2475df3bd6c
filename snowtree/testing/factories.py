"""Test factories for generating result data."""

from polyfactory.factories import DataclassFactory

from snowtree.models.result import ExecutionResult


class PassedResultFactory(DataclassFactory[ExecutionResult]):
    """Factory for a passed ExecutionResult."""

    __model__ = ExecutionResult

    status = "pass"
    message = None


class FailedResultFactory(DataclassFactory[ExecutionResult]):
    """Factory for a failed ExecutionResult."""

    __model__ = ExecutionResult

    status = "fail"
