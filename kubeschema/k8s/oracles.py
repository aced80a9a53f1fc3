"""K8s oracles for manifest validation.

This module turns manifest files into records and reports every rejection as
a Violation, so a whole directory of manifests can be checked in one pass.
"""

import logging
from typing import List

from kubeschema.core.errors import ConstraintViolation, SchemaLoadError
from kubeschema.core.schema.violation import Violation
from kubeschema.k8s.artifact import K8sArtifact
from kubeschema.k8s.resources import from_manifest
from kubeschema.k8s.schema import DEFAULT_KUBERNETES_VERSION

logger = logging.getLogger(__name__)


class ConstraintOracle:
    """Oracle that builds records from manifests and collects rule failures.

    Reports:
    - schema.INVALID_YAML: a file cannot be parsed
    - schema.INVALID_FIELD: a document does not match the Kubernetes schema
    - one Violation per failed rule, id set to the rule name

    Documents whose apiVersion/kind has no registered record are skipped.
    """

    def __init__(self, fail_fast: bool = False, kubernetes_version: str = DEFAULT_KUBERNETES_VERSION):
        """Initialize ConstraintOracle.

        Args:
            fail_fast: Report only the first failed rule of each document
            kubernetes_version: Kubernetes release whose schema documents are checked against
        """
        self.fail_fast = fail_fast
        self.kubernetes_version = kubernetes_version

    def __call__(self, artifact: K8sArtifact) -> List[Violation]:
        """Check every document of the artifact.

        Args:
            artifact: K8sArtifact to validate

        Returns:
            List of Violations (empty if all records were accepted)
        """
        violations = []

        for filepath in artifact.files:
            try:
                documents = artifact.documents(filepath)
            except Exception as e:
                violations.append(Violation(
                    id="schema.INVALID_YAML",
                    message=f"Failed to parse YAML: {e}",
                    path=[filepath],
                    severity="error",
                ))
                continue

            for index, manifest in documents:
                violations.extend(self._check_document(filepath, index, manifest))

        return violations

    def _check_document(self, filepath: str, index: int, manifest) -> List[Violation]:
        try:
            record = from_manifest(manifest, self.kubernetes_version)
        except SchemaLoadError as e:
            return [Violation(
                id="schema.INVALID_FIELD",
                message=str(e),
                path=[filepath] + e.path,
                severity="error",
                evidence={"document": index},
            )]
        except ConstraintViolation as e:
            logger.info("%s document %d rejected: %s", filepath, index, ", ".join(e.rule_names))
            found = e.prefixed([filepath]).violations
            if self.fail_fast:
                found = found[:1]
            return [
                Violation(
                    id=v.id,
                    message=v.message,
                    path=v.path,
                    severity=v.severity,
                    evidence=dict(v.evidence or {}, document=index),
                )
                for v in found
            ]

        if record is None:
            logger.debug("Skipping %s document %d: no record type", filepath, index)
        return []
