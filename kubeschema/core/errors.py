"""Exceptions raised while building and validating records."""

from typing import List, Optional, Sequence

from kubeschema.core.schema.violation import Violation, format_path


class ConstraintViolation(Exception):
    """Raised when one or more named rules reject a record.

    Construction of the enclosing record is aborted; there is no partially
    valid value. The message lists every failed rule with its field path.

    Attributes:
        violations: The failed rules, one Violation each
        record_type: Name of the record type that was rejected (optional)
    """

    def __init__(self, violations: List[Violation], record_type: Optional[str] = None) -> None:
        """Initialize ConstraintViolation exception.

        Args:
            violations: Non-empty list of violations that caused the rejection
            record_type: Name of the rejected record type (optional)
        """
        self.violations = list(violations)
        self.record_type = record_type
        details = "; ".join(f"{v.id} failed on {v.location}" for v in self.violations)
        subject = record_type or "record"
        super().__init__(f"{subject} rejected: {details}")

    @property
    def rule_names(self) -> List[str]:
        return [v.id for v in self.violations]

    def prefixed(self, prefix: Sequence[str]) -> "ConstraintViolation":
        """Return a copy with every violation path nested under ``prefix``."""
        return ConstraintViolation(
            [v.with_prefix(prefix) for v in self.violations],
            record_type=self.record_type,
        )

    def nested(self, prefix: Sequence[str]) -> "ConstraintViolation":
        """Return a copy with paths rooted at ``prefix`` instead of the record type."""
        return ConstraintViolation(
            [v.nested_under(prefix) for v in self.violations],
            record_type=self.record_type,
        )


class SchemaLoadError(Exception):
    """Raised when a manifest mapping does not match the declared field types.

    Type conformance is checked while loading, before any rule runs.

    Attributes:
        message: Description of the mismatch
        path: Field path of the offending value
    """

    def __init__(self, message: str, path: Optional[Sequence[str]] = None) -> None:
        self.path = list(path or [])
        self.message = message
        location = format_path(self.path)
        super().__init__(f"{location}: {message}" if location else message)

    def prefixed(self, prefix: Sequence[str]) -> "SchemaLoadError":
        return SchemaLoadError(self.message, list(prefix) + self.path)
