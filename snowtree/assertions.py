"""Failure signals raised from inside case bodies."""

from typing import Any, Literal, NoReturn

from snowtree.defer import current_scope

type CompareKind = Literal["int", "ptr", "dbl", "str", "buf"]

_BUFFER_TYPES = (bytes, bytearray, memoryview)


class CaseFailure(BaseException):
    """Marks the running case failed and abandons the rest of its body.

    Not an Exception subclass: `except Exception` in a case body lets it through.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def signal_failure(message: str) -> NoReturn:
    """Record the failure on the running case, then abandon its body."""
    if (scope := current_scope()) is not None:
        scope.record_failure(message)
    raise CaseFailure(message)


def fail(fmt: str, *args: Any) -> NoReturn:
    """Fail the running case with a printf-style message."""
    signal_failure(fmt % args if args else fmt)


def check(condition: object, message: str | None = None) -> None:
    """Fail the running case unless ``condition`` is truthy."""
    if not condition:
        signal_failure(message or "Assertion failed")


def infer_kind(value: object) -> CompareKind | None:
    """Pick a comparison kind from a value, or None for plain ``==``."""
    if isinstance(value, bool | int):
        return "int"
    if isinstance(value, float):
        return "dbl"
    if isinstance(value, str):
        return "str"
    if isinstance(value, _BUFFER_TYPES):
        return "buf"
    return None


def _equal(a: Any, b: Any, kind: CompareKind | None, length: int | None) -> bool:
    match kind:
        case "ptr":
            return a is b
        case "dbl":
            return float(a) == float(b)
        case "str" if length is not None:
            return a[:length] == b[:length]
        case "buf":
            a, b = bytes(a), bytes(b)
            if length is None:
                return a == b
            return len(a) >= length and len(b) >= length and a[:length] == b[:length]
        case _:
            return a == b


def _describe(a: Any, b: Any, kind: CompareKind | None, length: int | None) -> str:
    if kind == "buf":
        size = "" if length is None else f" ({length} bytes)"
        return f"buffers{size} {bytes(a)!r} and {bytes(b)!r}"
    if kind == "ptr":
        return f"{a!r} (id {id(a):#x}) and {b!r} (id {id(b):#x})"
    if kind == "str" and length is not None:
        return f"{a!r} and {b!r} (first {length} characters)"
    return f"{a!r} and {b!r}"


def asserteq(
    a: Any, b: Any, kind: CompareKind | None = None, *, length: int | None = None
) -> None:
    """Fail the running case unless ``a`` equals ``b``.

    Args:
        a: Actual value
        b: Expected value
        kind: How to compare; inferred from ``a`` when omitted
        length: For "str" and "buf", compare only this many leading items

    """
    kind = kind or infer_kind(a)
    if not _equal(a, b, kind, length):
        signal_failure(f"Expected {_describe(a, b, kind, length)} to be equal")


def assertneq(
    a: Any, b: Any, kind: CompareKind | None = None, *, length: int | None = None
) -> None:
    """Fail the running case if ``a`` equals ``b``."""
    kind = kind or infer_kind(a)
    if _equal(a, b, kind, length):
        signal_failure(f"Expected {_describe(a, b, kind, length)} to differ")


def asserteq_int(a: int, b: int) -> None:
    asserteq(a, b, "int")


def assertneq_int(a: int, b: int) -> None:
    assertneq(a, b, "int")


def asserteq_ptr(a: object, b: object) -> None:
    asserteq(a, b, "ptr")


def assertneq_ptr(a: object, b: object) -> None:
    assertneq(a, b, "ptr")


def asserteq_dbl(a: float, b: float) -> None:
    asserteq(a, b, "dbl")


def assertneq_dbl(a: float, b: float) -> None:
    assertneq(a, b, "dbl")


def asserteq_str(a: str, b: str, length: int | None = None) -> None:
    asserteq(a, b, "str", length=length)


def assertneq_str(a: str, b: str, length: int | None = None) -> None:
    assertneq(a, b, "str", length=length)


def asserteq_buf(a: bytes, b: bytes, length: int | None = None) -> None:
    asserteq(a, b, "buf", length=length)


def assertneq_buf(a: bytes, b: bytes, length: int | None = None) -> None:
    assertneq(a, b, "buf", length=length)
