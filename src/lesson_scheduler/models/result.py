"""
Result<T> pattern for scheduling mutations.

Every interactive mutation (add, move, copy, update, restore, ...) returns
a Result instead of raising: on success it carries the new scheduler value,
on failure a rejection code and user-facing message, with the conflict
detail when a placement collided with an existing lesson.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Generic, Optional, TypeVar

from .conflict import ConflictReason


T = TypeVar('T')
U = TypeVar('U')


class ResultStatus(Enum):
    """Status of a Result."""
    SUCCESS = "success"
    FAILURE = "failure"


class RejectionCode(Enum):
    """Why a mutation was blocked."""
    CONFLICT = "conflict"
    LUNCH_BREAK = "lunch_break"
    INACTIVE_STUDENT = "inactive_student"
    NOT_FOUND = "not_found"
    INVALID_LESSON = "invalid_lesson"
    NOT_DELETED = "not_deleted"


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a scheduling operation that may be rejected.

    Attributes:
        status: Result status (SUCCESS or FAILURE)
        value: The new value if successful (None if failure)
        message: Optional message describing the result
        code: Rejection code (failure only)
        conflict: Colliding constraint when code is CONFLICT
        error: Exception that caused the failure, if any
        report: Structured detail of a partially applied operation
            (e.g. the RecurrenceReport of a weekly repeat)

    Examples:
        >>> result = scheduler.move_lesson("lesson-1", date(2026, 10, 20), "10:00")
        >>> if result.is_success:
        ...     scheduler = result.value
        ... else:
        ...     print(f"Could not move lesson: {result.message}")
    """

    status: ResultStatus
    value: Optional[T] = None
    message: Optional[str] = None
    code: Optional[RejectionCode] = None
    conflict: Optional[ConflictReason] = None
    error: Optional[Exception] = None
    report: Optional[Any] = None

    @property
    def is_success(self) -> bool:
        """Check if the result represents success."""
        return self.status == ResultStatus.SUCCESS

    @property
    def is_failure(self) -> bool:
        """Check if the result represents failure."""
        return self.status == ResultStatus.FAILURE

    @classmethod
    def success(
        cls,
        value: T,
        message: Optional[str] = None,
        report: Optional[Any] = None
    ) -> 'Result[T]':
        """
        Create a successful result.

        Args:
            value: The result value
            message: Optional success message
            report: Optional structured detail

        Returns:
            Result instance with SUCCESS status
        """
        return cls(status=ResultStatus.SUCCESS, value=value, message=message, report=report)

    @classmethod
    def failure(
        cls,
        message: str,
        code: Optional[RejectionCode] = None,
        conflict: Optional[ConflictReason] = None,
        error: Optional[Exception] = None
    ) -> 'Result[T]':
        """
        Create a failure result.

        Args:
            message: User-facing explanation of the rejection
            code: Rejection code
            conflict: Conflict detail for CONFLICT rejections
            error: Optional exception that caused the failure

        Returns:
            Result instance with FAILURE status
        """
        return cls(
            status=ResultStatus.FAILURE,
            message=message,
            code=code,
            conflict=conflict,
            error=error
        )

    @classmethod
    def rejected_by(cls, conflict: ConflictReason, prefix: str = "") -> 'Result[T]':
        """Create a CONFLICT failure from a conflict reason."""
        return cls.failure(
            f"{prefix}{conflict.message}",
            code=RejectionCode.CONFLICT,
            conflict=conflict
        )

    def unwrap(self) -> T:
        """
        Unwrap the result value.

        Raises:
            ValueError: If the result is a failure
        """
        if self.is_failure:
            raise ValueError(f"Cannot unwrap failure result: {self.message}")
        return self.value

    def unwrap_or(self, default: T) -> T:
        """Unwrap the result value or return a default."""
        return self.value if self.is_success else default

    def map(self, func: Callable[[T], U]) -> 'Result[U]':
        """
        Map a function over the success value.

        Failures pass through unchanged, keeping their code and conflict.
        """
        if self.is_failure:
            return Result.failure(self.message, self.code, self.conflict, self.error)
        return Result.success(func(self.value), self.message, self.report)
