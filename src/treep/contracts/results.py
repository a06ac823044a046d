"""Validation outcome types.

Validation violations are data, not exceptions: the validator collects every
FieldError it finds into a ValidationResult and returns it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, slots=True)
class FieldError:
    """A single constraint violation.

    Attributes:
        field: Name of the violating field ("root" for non-object records)
        message: Human-readable description, always prefixed by the field name
        code: Stable violation kind (e.g. "REQUIRED_FIELD", "TYPE_MISMATCH")
    """

    field: str
    message: str
    code: str

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for serialization."""
        return {"field": self.field, "message": self.message, "code": self.code}


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of validating one record.

    ``is_valid`` is derived from ``errors`` so the two can never disagree.
    """

    errors: tuple[FieldError, ...] = ()

    @property
    def is_valid(self) -> bool:
        """True iff no violations were found."""
        return not self.errors

    def __bool__(self) -> bool:
        return self.is_valid

    @property
    def messages(self) -> list[str]:
        """Violation messages in detection order."""
        return [error.message for error in self.errors]

    def errors_for(self, field: str) -> list[FieldError]:
        """Get violations reported against a specific field."""
        return [error for error in self.errors if error.field == field]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "is_valid": self.is_valid,
            "errors": [error.to_dict() for error in self.errors],
        }
