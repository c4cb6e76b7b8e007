"""
Validation framework with Strategy pattern.

This module provides:
- Abstract Validator interface
- ValidationResult for consistent validation reporting
- Field checks shared by the lesson and roster validators
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable, List, Optional

from ..utils.time_utils import is_valid_time


@dataclass
class ValidationResult:
    """
    Result of data validation.

    Attributes:
        is_valid: Whether validation passed
        errors: List of error messages
        warnings: List of warning messages (non-fatal)
    """

    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def add_error(self, message: str) -> 'ValidationResult':
        """
        Add an error message.

        Returns:
            Self for method chaining
        """
        self.errors.append(message)
        self.is_valid = False
        return self

    def add_warning(self, message: str) -> 'ValidationResult':
        """
        Add a warning message.

        Returns:
            Self for method chaining
        """
        self.warnings.append(message)
        return self

    def merge(self, other: 'ValidationResult', prefix: str = "") -> 'ValidationResult':
        """
        Fold another result into this one.

        Args:
            other: Result to merge
            prefix: Text prepended to each merged message (e.g. "lessons[3]: ")

        Returns:
            Self for method chaining
        """
        for error in other.errors:
            self.add_error(f"{prefix}{error}")
        for warning in other.warnings:
            self.add_warning(f"{prefix}{warning}")
        return self

    @property
    def has_errors(self) -> bool:
        """Check if there are errors."""
        return len(self.errors) > 0

    @property
    def has_warnings(self) -> bool:
        """Check if there are warnings."""
        return len(self.warnings) > 0

    def get_summary(self) -> str:
        """
        Get validation summary.

        Returns:
            Human-readable summary of validation results
        """
        if self.is_valid and not self.has_warnings:
            return "Validation passed"

        parts = []

        if self.has_errors:
            parts.append(f"Errors ({len(self.errors)}):")
            for error in self.errors:
                parts.append(f"  - {error}")

        if self.has_warnings:
            parts.append(f"Warnings ({len(self.warnings)}):")
            for warning in self.warnings:
                parts.append(f"  - {warning}")

        return "\n".join(parts)


class Validator(ABC):
    """
    Abstract base class for validators.

    Subclasses implement validate(); the helpers below return an error
    message, or None when the value is acceptable.
    """

    @abstractmethod
    def validate(self, data: Any) -> ValidationResult:
        """
        Validate data.

        Args:
            data: Data to validate

        Returns:
            ValidationResult with errors and warnings
        """
        pass

    def validate_required_fields(
        self,
        data: dict,
        required_fields: List[str]
    ) -> List[str]:
        """
        Validate that required fields exist.

        Returns:
            List of error messages for missing fields
        """
        errors = []
        for name in required_fields:
            if name not in data or data[name] is None:
                errors.append(f"Missing required field: {name}")
        return errors

    def validate_date_format(
        self,
        date_str: Any,
        field_name: str = "date"
    ) -> Optional[str]:
        """Validate a calendar date string (YYYY-MM-DD)."""
        if not isinstance(date_str, str) or not re.match(r'^\d{4}-\d{2}-\d{2}$', date_str):
            return f"Invalid {field_name} format: {date_str} (expected YYYY-MM-DD)"
        try:
            date.fromisoformat(date_str)
        except ValueError:
            return f"Invalid {field_name}: {date_str} is not a calendar date"
        return None

    def validate_time_format(
        self,
        time_str: Any,
        field_name: str = "time"
    ) -> Optional[str]:
        """Validate a time-of-day string (HH:MM)."""
        if not isinstance(time_str, str) or not is_valid_time(time_str):
            return f"Invalid {field_name} format: {time_str} (expected HH:MM)"
        return None

    def validate_string_length(
        self,
        value: Any,
        field_name: str,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None
    ) -> Optional[str]:
        """Validate string type and length."""
        if not isinstance(value, str):
            return f"{field_name} must be a string, got {type(value).__name__}"

        length = len(value)

        if min_length is not None and length < min_length:
            return f"{field_name} must be at least {min_length} characters, got {length}"

        if max_length is not None and length > max_length:
            return f"{field_name} must be at most {max_length} characters, got {length}"

        return None

    def validate_choice(
        self,
        value: Any,
        field_name: str,
        choices: Iterable[str]
    ) -> Optional[str]:
        """Validate that value is one of a fixed vocabulary."""
        choices = list(choices)
        if value not in choices:
            return f"Invalid {field_name}: {value} (must be one of: {', '.join(choices)})"
        return None
