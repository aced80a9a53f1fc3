"""Oracle protocol for artifact-level checks."""

from typing import Any, List, Protocol

from kubeschema.core.schema.violation import Violation


class Oracle(Protocol):
    """Verification function interface.

    An oracle is a callable that checks an artifact (for example a set of
    manifest files) and returns a list of violations. Rule rejections raised
    while building records are converted to violations at this boundary.

    Example:
        def my_oracle(artifact: K8sArtifact) -> List[Violation]:
            violations = []
            # ... build records, collect rejections ...
            return violations
    """

    def __call__(self, artifact: Any) -> List[Violation]:
        """Check artifact and return violations.

        Args:
            artifact: The artifact to verify (type depends on domain)

        Returns:
            List of violations found during verification.
            Empty list if artifact passes all checks.
        """
        ...
