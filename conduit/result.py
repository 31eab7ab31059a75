"""
Tagged success / failure values returned by the service layer.

Business-rule failures (missing article, wrong author, ...) are values, not
exceptions: every workflow call returns either ``Ok(value)`` or
``Err(error)`` and the caller branches on ``isinstance``.  Only genuinely
unexpected faults (database unreachable, constraint bugs) raise.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar, Union

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err(Generic[E]):
    error: E

    def is_ok(self) -> bool:
        return False


Result = Union[Ok[T], Err[E]]
