"""K8s field rules.

Each rule is a pure predicate over a single field value. The port name rules
operate on a whole port list, the others on scalar fields.
"""

import ipaddress
import re
from typing import Any, Sequence

from kubeschema.core.schema.rule import rule
from kubeschema.k8s.constants import (
    DNS_LABEL_MAX_LENGTH,
    DNS_LABEL_PATTERN,
    MAX_PORT,
    MIN_PORT,
    SUPPORTED_PROTOCOLS,
)

_DNS_LABEL = re.compile(DNS_LABEL_PATTERN)


@rule()
def has_unique_port_names(ports: Sequence[Any]) -> bool:
    """Ports list has no two entries sharing the same non-null name."""
    seen = set()
    for port in ports:
        if port.name is None:
            continue
        if port.name in seen:
            return False
        seen.add(port.name)
    return True


@rule()
def has_non_null_port_names(ports: Sequence[Any]) -> bool:
    """Every port is named when the list holds more than one port.

    A lone port needs no disambiguating name, so zero or one entry always
    passes.
    """
    if len(ports) <= 1:
        return True
    return all(port.name is not None for port in ports)


@rule()
def is_dns_label(value: str) -> bool:
    """Value is a lowercase RFC 1123 label of at most 63 characters."""
    return len(value) <= DNS_LABEL_MAX_LENGTH and _DNS_LABEL.fullmatch(value) is not None


@rule()
def is_valid_port_number(port: int) -> bool:
    """Port number is between 1 and 65535."""
    # bool is an int subclass
    if isinstance(port, bool) or not isinstance(port, int):
        return False
    return MIN_PORT <= port <= MAX_PORT


@rule()
def is_supported_protocol(protocol: Any) -> bool:
    """Protocol is one of TCP, UDP or SCTP."""
    return getattr(protocol, "value", protocol) in SUPPORTED_PROTOCOLS


@rule()
def is_ip_address(value: str) -> bool:
    """Value is an IPv4 or IPv6 address."""
    try:
        ipaddress.ip_address(value)
    except ValueError:
        return False
    return True
