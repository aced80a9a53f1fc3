"""K8s constants used across rule and resource modules.

Kept in one module so rules and records can share them without circular
imports.
"""

# Protocols accepted by EndpointPort.protocol
SUPPORTED_PROTOCOLS = ("TCP", "UDP", "SCTP")

# RFC 1123 label: lowercase alphanumerics and '-', alphanumeric at both ends
DNS_LABEL_PATTERN = r"[a-z0-9]([-a-z0-9]*[a-z0-9])?"
DNS_LABEL_MAX_LENGTH = 63

MIN_PORT = 1
MAX_PORT = 65535
