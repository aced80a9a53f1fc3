"""K8s schema conformance for manifests.

Field types, required fields and enumerations are checked against the
upstream Kubernetes schema with the kubernetes-validate library before any
record is built, so rules only ever see well-typed values.
"""

import logging
from typing import Any, List, Optional

from kubernetes_validate.utils import ValidationError, validate

from kubeschema.core.errors import SchemaLoadError

logger = logging.getLogger(__name__)

DEFAULT_KUBERNETES_VERSION = "1.28"


def check_schema(
    manifest: Any,
    kubernetes_version: str = DEFAULT_KUBERNETES_VERSION,
    path: Optional[List[str]] = None,
) -> None:
    """Validate a parsed manifest against the Kubernetes schema.

    Args:
        manifest: Parsed manifest mapping
        kubernetes_version: Kubernetes release whose schema is used
        path: Location prefix for the reported error path

    Raises:
        SchemaLoadError: the manifest does not conform; ``path`` points at the
            offending value (e.g. ["Endpoints", "subsets", "0", "ports", "0", "port"])
    """
    try:
        validate(manifest, kubernetes_version, strict=False)
    except ValidationError as e:
        # The library wraps the underlying jsonschema error
        source = getattr(e, "caught", None) or e
        segments = [str(segment) for segment in getattr(source, "path", None) or []]
        message = getattr(source, "message", None) or str(e)
        logger.debug("Schema check failed at %s: %s", segments, message)
        raise SchemaLoadError(message, list(path or []) + segments) from None
