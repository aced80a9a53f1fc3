"""Constraint evaluator for named field rules.

Records declare their rules in a ``__field_rules__`` class attribute mapping
field names to sequences of ``Rule`` objects. The evaluator reads that
mapping, runs each rule against the field value and turns every failure into
a ``Violation``. Evaluation is pure: the same record always yields the same
violations.
"""

import logging
from typing import Any, List, Mapping, Sequence

from kubeschema.core.errors import ConstraintViolation
from kubeschema.core.schema.rule import Rule
from kubeschema.core.schema.violation import Violation

logger = logging.getLogger(__name__)


def field_rules(record: Any) -> Mapping[str, Sequence[Rule]]:
    """Return the rules declared on the record's type (empty if none)."""
    return getattr(type(record), "__field_rules__", None) or {}


def evaluate_field(
    record_type: str, field_name: str, value: Any, rules: Sequence[Rule], fail_fast: bool = False
) -> List[Violation]:
    """Run the rules attached to one field.

    A ``None`` value is not evaluated: rules on an optional field only apply
    once the field is set.

    Args:
        record_type: Name of the owning record type, used in paths and messages
        field_name: Name of the field being checked
        value: The field value
        rules: Rules attached to the field
        fail_fast: Stop at the first failing rule

    Returns:
        List of violations, one per failed rule
    """
    if value is None:
        return []

    violations: List[Violation] = []
    path = [record_type, field_name]

    for current in rules:
        logger.debug("Evaluating %s on %s.%s", current.name, record_type, field_name)
        try:
            passed = current(value)
        except Exception as e:
            # A crashing predicate counts as a failure of that rule
            violations.append(Violation(
                id=current.name,
                message=f"Rule {current.name} raised on {record_type}.{field_name}: {e}",
                path=path,
                evidence={"exception": str(e), "exception_type": type(e).__name__},
            ))
        else:
            if not passed:
                violations.append(Violation(
                    id=current.name,
                    message=f"Rule {current.name} failed on {record_type}.{field_name}"
                            + (f": {current.description}" if current.description else ""),
                    path=path,
                    evidence={"value": value},
                ))
        if violations and fail_fast:
            break

    return violations


def evaluate(record: Any, fail_fast: bool = False) -> List[Violation]:
    """Evaluate every field rule declared on a record.

    Args:
        record: Record instance whose type declares ``__field_rules__``
        fail_fast: Stop at the first violation instead of collecting all

    Returns:
        Aggregated list of violations. Empty list means the record is valid.
    """
    record_type = type(record).__name__
    violations: List[Violation] = []

    for field_name, rules in field_rules(record).items():
        value = getattr(record, field_name)
        violations.extend(evaluate_field(record_type, field_name, value, rules, fail_fast=fail_fast))
        if violations and fail_fast:
            break

    return violations


def enforce(record: Any) -> None:
    """Reject the record if any of its rules fail.

    Raises:
        ConstraintViolation: carrying every failed rule of the record
    """
    violations = evaluate(record)
    if violations:
        record_type = type(record).__name__
        logger.info("Rejected %s: %s", record_type, ", ".join(v.id for v in violations))
        raise ConstraintViolation(violations, record_type=record_type)
