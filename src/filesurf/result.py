"""Uniform outcome type for filesystem and repository operations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass
class Result(Generic[T]):
    """Outcome of an operation: Ok (optionally with a value) or Error.

    A result is Ok exactly when :attr:`errors` is empty.  Results compose
    only through :meth:`merge`, which appends the other result's errors, so
    a batch of independent steps reports every failure rather than the
    first one.

    Attributes:
        value: Payload of a successful operation (``None`` when absent).
        errors: Human-readable error messages, in the order they occurred.
    """
    value: T | None = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def ok(cls, value: T | None = None) -> Result[T]:
        """Return a successful result, optionally carrying *value*."""
        return cls(value=value)

    @classmethod
    def error(cls, *messages: str) -> Result[T]:
        """Return a failed result carrying one or more *messages*."""
        if not messages:
            messages = ("Operation failed",)
        return cls(errors=list(messages))

    @classmethod
    def from_exception(cls, exc: BaseException) -> Result[T]:
        """Convert a host exception into an Error carrying its message text."""
        return cls.error(str(exc) or type(exc).__name__)

    @classmethod
    def combine(cls, results: Iterable[Result]) -> Result[T]:
        """Fold *results* into a single result with :meth:`merge`."""
        combined: Result[T] = cls.ok()
        for result in results:
            combined.merge(result)
        return combined

    @property
    def is_ok(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        """All error messages joined by newlines (empty when Ok)."""
        return "\n".join(self.errors)

    def merge(self, other: Result) -> Result[T]:
        """Append *other*'s errors to this result and return ``self``."""
        if other.errors:
            self.errors.extend(other.errors)
        return self

    def __repr__(self) -> str:
        if self.is_ok:
            return "Result.ok()" if self.value is None else f"Result.ok({self.value!r})"
        return f"Result.error({', '.join(repr(e) for e in self.errors)})"
