"""Discriminated success/failure results returned by the service boundary.

Service operations never let exceptions escape. They return either a
``Success`` carrying the data or a ``Failure`` carrying a ``ServiceError``
with a stable code, so callers branch on ``result.success``.

Example:
    >>> result = service.get_character(character_id, requester_id)
    >>> if result.success:
    ...     print(result.data.name)
    ... else:
    ...     print(result.error.code)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar, Union

from dnd_roster.core.exceptions import CharacterServiceError


T = TypeVar("T")


@dataclass(frozen=True)
class ServiceError:
    """Error payload of a failed service operation.

    Attributes:
        code: Stable machine-readable error code.
        message: Human-readable description.
        details: Structured context (IDs, counts, field violations).
    """

    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_exception(cls, exc: CharacterServiceError) -> ServiceError:
        """Build the payload from a character service exception."""
        return cls(code=exc.code, message=exc.message, details=dict(exc.details))


@dataclass(frozen=True)
class Success(Generic[T]):
    """Successful outcome holding the operation's data."""

    data: T
    success: Literal[True] = True


@dataclass(frozen=True)
class Failure:
    """Failed outcome holding the error payload."""

    error: ServiceError
    success: Literal[False] = False

    @property
    def code(self) -> str:
        """Shortcut for ``error.code``."""
        return self.error.code


ServiceResult = Union[Success[T], Failure]


def success_result(data: T) -> Success[T]:
    """Wrap data in a Success."""
    return Success(data)


def failure_result(exc: CharacterServiceError) -> Failure:
    """Wrap a character service exception in a Failure."""
    return Failure(ServiceError.from_exception(exc))


__all__ = [
    "ServiceError",
    "Success",
    "Failure",
    "ServiceResult",
    "success_result",
    "failure_result",
]
