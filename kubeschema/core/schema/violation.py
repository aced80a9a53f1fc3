"""Violation model for representing failed rules on a record."""

from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional, Sequence


def format_path(path: Sequence[str]) -> str:
    """Render a path as ``Endpoints.subsets[0].ports``.

    Purely numeric segments are rendered as list indexes.
    """
    rendered = ""
    for segment in path:
        if segment.isdigit():
            rendered += f"[{segment}]"
        elif rendered:
            rendered += f".{segment}"
        else:
            rendered = segment
    return rendered


@dataclass(frozen=True)
class Violation:
    """Represents a named rule that failed on a record field.

    Violations are produced by the constraint evaluator and by oracles at
    the manifest boundary. They describe which rule failed, where, and carry
    evidence for debugging.

    Attributes:
        id: Name of the failed rule (e.g., "has_unique_port_names") or a
            loader error code (e.g., "schema.INVALID_YAML")
        message: Human-readable description of the violation
        path: Location path as list of strings (e.g., ["EndpointSubset", "ports"])
        severity: Always "error"; every violation is fatal to the record
        evidence: Rule-specific data such as the offending values
    """

    id: str
    message: str
    path: List[str]
    severity: str = "error"
    evidence: Optional[Dict[str, Any]] = None

    @property
    def location(self) -> str:
        """Dotted rendering of ``path``."""
        return format_path(self.path)

    def with_prefix(self, prefix: Sequence[str]) -> "Violation":
        """Return a copy whose path is nested under ``prefix``."""
        return replace(self, path=list(prefix) + list(self.path))

    def nested_under(self, prefix: Sequence[str]) -> "Violation":
        """Return a copy whose leading record-type segment is replaced by ``prefix``.

        Used when a nested record is rejected while its parent is being
        loaded, so the path reads from the parent's point of view.
        """
        return replace(self, path=list(prefix) + list(self.path[1:]))

    def to_dict(self) -> Dict[str, Any]:
        """Convert violation to dictionary format.

        Returns:
            Dictionary representation of the violation
        """
        result = {
            "id": self.id,
            "message": self.message,
            "path": list(self.path),
            "severity": self.severity,
        }
        if self.evidence is not None:
            result["evidence"] = dict(self.evidence)
        return result
