"""Verifier for executing oracles and aggregating violations."""

import logging
from typing import Any, List

from kubeschema.core.schema.oracle import Oracle
from kubeschema.core.schema.violation import Violation

logger = logging.getLogger(__name__)


def verify(artifact: Any, oracles: List[Oracle]) -> List[Violation]:
    """Execute all oracles against artifact and aggregate violations.

    Oracles run sequentially. An oracle that crashes is reported as a
    violation and the remaining oracles still run.

    Args:
        artifact: The artifact to verify (e.g., K8sArtifact)
        oracles: List of verification functions to execute

    Returns:
        Aggregated list of violations from all oracles. Returns empty list if
        no oracles provided or if all oracles pass.

    Example:
        >>> artifact = K8sArtifact.from_file("endpoints.yaml")
        >>> violations = verify(artifact, [ConstraintOracle()])
        >>> len(violations)
        0
    """
    if not oracles:
        return []

    violations: List[Violation] = []

    for oracle in oracles:
        try:
            violations.extend(oracle(artifact))
        except Exception as e:
            name = getattr(oracle, "__name__", type(oracle).__name__)
            logger.exception("Oracle %s failed", name)
            violations.append(Violation(
                id=f"oracle_error:{name}",
                message=f"Oracle execution failed: {e}",
                path=["verifier", "oracle_error"],
                severity="error",
                evidence={"exception": str(e), "exception_type": type(e).__name__},
            ))

    return violations
