"""K8s resource records.

Records are frozen dataclasses. Those deriving from ``ValidatedRecord``
declare ``__field_rules__`` and are checked as soon as they are built, so an
``EndpointSubset`` with two ports named ``http`` can never exist.

Field names are snake_case; ``from_dict`` accepts the camelCase keys used in
manifests. ``from_manifest`` checks the manifest against the Kubernetes
schema first, so ``from_dict`` only converts values.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Type

from kubeschema.core.errors import ConstraintViolation, SchemaLoadError
from kubeschema.core.schema.record import ValidatedRecord
from kubeschema.k8s.rules import (
    has_non_null_port_names,
    has_unique_port_names,
    is_dns_label,
    is_ip_address,
    is_supported_protocol,
    is_valid_port_number,
)
from kubeschema.k8s.schema import DEFAULT_KUBERNETES_VERSION, check_schema

logger = logging.getLogger(__name__)


class PortProtocol(str, Enum):
    """IP protocol of a port."""

    TCP = "TCP"
    UDP = "UDP"
    SCTP = "SCTP"


def _required(data: Mapping[str, Any], key: str, path: List[str]) -> Any:
    if data.get(key) is None:
        raise SchemaLoadError("missing required field", path + [key])
    return data[key]


def _construct(cls: Type[Any], path: List[str], **kwargs: Any) -> Any:
    """Build a record, re-rooting any rejection at ``path``."""
    try:
        return cls(**kwargs)
    except ConstraintViolation as e:
        raise e.nested(path) from None


@dataclass(frozen=True)
class ObjectMeta:
    """Standard object metadata (the subset this package reads)."""

    name: Optional[str] = None
    namespace: Optional[str] = None
    labels: Optional[Dict[str, str]] = None
    annotations: Optional[Dict[str, str]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: Optional[List[str]] = None) -> "ObjectMeta":
        labels = data.get("labels")
        annotations = data.get("annotations")
        return cls(
            name=data.get("name"),
            namespace=data.get("namespace"),
            labels=dict(labels) if labels is not None else None,
            annotations=dict(annotations) if annotations is not None else None,
        )


@dataclass(frozen=True)
class EndpointPort(ValidatedRecord):
    """A port used by an endpoint.

    Attributes:
        port: The port number of the endpoint
        name: Name of the port, must match the corresponding ServicePort name.
            Optional only if one port is defined.
        protocol: IP protocol for this port (default TCP)
        app_protocol: Application protocol for this port, informational only
    """

    __field_rules__ = {
        "name": (is_dns_label,),
        "port": (is_valid_port_number,),
        "protocol": (is_supported_protocol,),
    }

    port: int
    name: Optional[str] = None
    protocol: PortProtocol = PortProtocol.TCP
    app_protocol: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: Optional[List[str]] = None) -> "EndpointPort":
        path = path or [cls.__name__]
        port = _required(data, "port", path)

        protocol = PortProtocol.TCP
        if data.get("protocol") is not None:
            try:
                protocol = PortProtocol(data["protocol"])
            except ValueError:
                allowed = ", ".join(p.value for p in PortProtocol)
                raise SchemaLoadError(
                    f"unknown protocol {data['protocol']!r} (allowed: {allowed})", path + ["protocol"]
                ) from None

        return _construct(
            cls,
            path,
            port=port,
            name=data.get("name"),
            protocol=protocol,
            app_protocol=data.get("appProtocol"),
        )


@dataclass(frozen=True)
class EndpointAddress(ValidatedRecord):
    """A single IP address of an endpoint."""

    __field_rules__ = {
        "ip": (is_ip_address,),
        "hostname": (is_dns_label,),
    }

    ip: str
    hostname: Optional[str] = None
    node_name: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: Optional[List[str]] = None) -> "EndpointAddress":
        path = path or [cls.__name__]
        return _construct(
            cls,
            path,
            ip=_required(data, "ip", path),
            hostname=data.get("hostname"),
            node_name=data.get("nodeName"),
        )


@dataclass(frozen=True)
class EndpointSubset(ValidatedRecord):
    """A group of addresses with a common set of ports.

    The expanded set of endpoints is the Cartesian product of addresses x
    ports. Ports must be uniquely named, and named at all once there is more
    than one of them.
    """

    __field_rules__ = {
        "ports": (has_unique_port_names, has_non_null_port_names),
    }

    addresses: Sequence[EndpointAddress] = ()
    not_ready_addresses: Sequence[EndpointAddress] = ()
    ports: Optional[Sequence[EndpointPort]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: Optional[List[str]] = None) -> "EndpointSubset":
        path = path or [cls.__name__]

        addresses = tuple(
            EndpointAddress.from_dict(item, path + ["addresses", str(i)])
            for i, item in enumerate(data.get("addresses") or [])
        )
        not_ready = tuple(
            EndpointAddress.from_dict(item, path + ["notReadyAddresses", str(i)])
            for i, item in enumerate(data.get("notReadyAddresses") or [])
        )
        ports = None
        if data.get("ports") is not None:
            ports = tuple(
                EndpointPort.from_dict(item, path + ["ports", str(i)])
                for i, item in enumerate(data["ports"])
            )

        return _construct(cls, path, addresses=addresses, not_ready_addresses=not_ready, ports=ports)


@dataclass(frozen=True)
class Endpoints:
    """Endpoints is a collection of endpoints that implement an actual service."""

    API_VERSION = "v1"
    KIND = "Endpoints"

    metadata: Optional[ObjectMeta] = None
    subsets: Sequence[EndpointSubset] = ()
    api_version: str = field(default=API_VERSION, init=False)
    kind: str = field(default=KIND, init=False)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], path: Optional[List[str]] = None) -> "Endpoints":
        path = path or [cls.__name__]

        if data.get("apiVersion") != cls.API_VERSION:
            raise SchemaLoadError(f"expected {cls.API_VERSION!r}, got {data.get('apiVersion')!r}", path + ["apiVersion"])
        if data.get("kind") != cls.KIND:
            raise SchemaLoadError(f"expected {cls.KIND!r}, got {data.get('kind')!r}", path + ["kind"])

        metadata = None
        if data.get("metadata") is not None:
            metadata = ObjectMeta.from_dict(data["metadata"], path + ["metadata"])

        subsets = tuple(
            EndpointSubset.from_dict(item, path + ["subsets", str(i)])
            for i, item in enumerate(data.get("subsets") or [])
        )
        return cls(metadata=metadata, subsets=subsets)


RESOURCE_TYPES: Dict[Tuple[str, str], Type[Any]] = {
    (Endpoints.API_VERSION, Endpoints.KIND): Endpoints,
}


def from_manifest(manifest: Any, kubernetes_version: str = DEFAULT_KUBERNETES_VERSION) -> Optional[Any]:
    """Build the record for an already-parsed manifest.

    The manifest is checked against the Kubernetes schema of
    ``kubernetes_version`` before any record is built.

    Args:
        manifest: Mapping with at least ``apiVersion`` and ``kind``
        kubernetes_version: Kubernetes release whose schema is used

    Returns:
        The built record, or None when the (apiVersion, kind) pair has no
        registered record type

    Raises:
        SchemaLoadError: manifest is not a mapping or does not match the schema
        ConstraintViolation: a rule rejected one of the records
    """
    if not isinstance(manifest, dict):
        raise SchemaLoadError(f"expected mapping, got {type(manifest).__name__}")
    key = (manifest.get("apiVersion"), manifest.get("kind"))
    record_type = RESOURCE_TYPES.get(key)
    if record_type is None:
        logger.debug("No record type registered for %s/%s", *key)
        return None

    check_schema(manifest, kubernetes_version, path=[record_type.__name__])
    return record_type.from_dict(manifest)
