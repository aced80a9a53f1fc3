"""Tests for K8s resource records."""

import pytest

from kubeschema.core.errors import ConstraintViolation, SchemaLoadError
from kubeschema.k8s.resources import (
    EndpointAddress,
    EndpointPort,
    Endpoints,
    EndpointSubset,
    ObjectMeta,
    PortProtocol,
    from_manifest,
)

ENDPOINTS_MANIFEST = {
    "apiVersion": "v1",
    "kind": "Endpoints",
    "metadata": {"name": "payments-api", "namespace": "payments", "labels": {"app": "payments-api"}},
    "subsets": [
        {
            "addresses": [{"ip": "10.0.0.1", "nodeName": "node-a"}, {"ip": "10.0.0.2"}],
            "notReadyAddresses": [{"ip": "10.0.0.3", "hostname": "payments-2"}],
            "ports": [
                {"name": "http", "port": 8080},
                {"name": "metrics", "port": 9090, "protocol": "TCP", "appProtocol": "http"},
            ],
        },
        {
            "addresses": [{"ip": "fd00::1"}],
            "ports": [{"port": 53, "protocol": "UDP"}],
        },
    ],
}


def manifest_with_ports(ports):
    return {
        "apiVersion": "v1",
        "kind": "Endpoints",
        "metadata": {"name": "svc"},
        "subsets": [
            {"addresses": [{"ip": "10.0.0.1"}], "ports": [{"name": "ok", "port": 80}]},
            {"addresses": [{"ip": "10.0.0.2"}], "ports": ports},
        ],
    }


class TestEndpointPort:
    """Tests for EndpointPort construction."""

    def test_defaults(self):
        port = EndpointPort(port=80)

        assert port.name is None
        assert port.protocol is PortProtocol.TCP
        assert port.app_protocol is None

    def test_invalid_name_rejected(self):
        with pytest.raises(ConstraintViolation) as exc_info:
            EndpointPort(name="HTTP_Port", port=80)

        assert exc_info.value.rule_names == ["is_dns_label"]

    @pytest.mark.parametrize("name", ["http\n", "http\n\n", "\nhttp"])
    def test_name_with_line_break_rejected(self, name):
        """Test that a trailing or leading newline does not slip past the label pattern."""
        with pytest.raises(ConstraintViolation) as exc_info:
            EndpointPort(name=name, port=80)

        assert exc_info.value.rule_names == ["is_dns_label"]

    def test_port_out_of_range_rejected(self):
        with pytest.raises(ConstraintViolation) as exc_info:
            EndpointPort(name="http", port=70000)

        assert exc_info.value.rule_names == ["is_valid_port_number"]

    def test_unsupported_protocol_rejected(self):
        with pytest.raises(ConstraintViolation) as exc_info:
            EndpointPort(port=80, protocol="HTTP")

        assert exc_info.value.rule_names == ["is_supported_protocol"]


class TestEndpointSubset:
    """Tests for port list rules on EndpointSubset."""

    def test_distinct_named_ports_accepted(self):
        """Test [{a,80},{b,81}] builds."""
        subset = EndpointSubset(ports=[EndpointPort(name="a", port=80), EndpointPort(name="b", port=81)])

        assert subset.validate() == []

    def test_duplicate_names_rejected(self):
        """Test [{a,80},{a,81}] is rejected by has_unique_port_names."""
        with pytest.raises(ConstraintViolation) as exc_info:
            EndpointSubset(ports=[EndpointPort(name="a", port=80), EndpointPort(name="a", port=81)])

        error = exc_info.value
        assert error.rule_names == ["has_unique_port_names"]
        assert error.record_type == "EndpointSubset"
        assert error.violations[0].location == "EndpointSubset.ports"

    def test_single_unnamed_port_accepted(self):
        """Test [{null,80}] builds: a lone port needs no name."""
        subset = EndpointSubset(ports=[EndpointPort(port=80)])

        assert subset.ports[0].name is None

    def test_unnamed_port_among_several_rejected(self):
        """Test [{null,80},{b,81}] is rejected by has_non_null_port_names."""
        with pytest.raises(ConstraintViolation) as exc_info:
            EndpointSubset(ports=[EndpointPort(port=80), EndpointPort(name="b", port=81)])

        assert exc_info.value.rule_names == ["has_non_null_port_names"]

    def test_both_rules_can_fail_together(self):
        ports = [EndpointPort(name="a", port=80), EndpointPort(name="a", port=81), EndpointPort(port=82)]

        with pytest.raises(ConstraintViolation) as exc_info:
            EndpointSubset(ports=ports)

        assert exc_info.value.rule_names == ["has_unique_port_names", "has_non_null_port_names"]

    def test_no_ports(self):
        assert EndpointSubset().ports is None
        assert EndpointSubset(ports=[]).validate() == []


class TestEndpoints:
    """Tests for the Endpoints resource."""

    def test_discriminators_fixed(self):
        endpoints = Endpoints()

        assert endpoints.api_version == "v1"
        assert endpoints.kind == "Endpoints"

    def test_from_dict(self):
        endpoints = Endpoints.from_dict(ENDPOINTS_MANIFEST)

        assert endpoints.metadata == ObjectMeta(
            name="payments-api", namespace="payments", labels={"app": "payments-api"}
        )
        assert len(endpoints.subsets) == 2
        first, second = endpoints.subsets
        assert first.addresses[0] == EndpointAddress(ip="10.0.0.1", node_name="node-a")
        assert first.not_ready_addresses[0].hostname == "payments-2"
        assert [p.name for p in first.ports] == ["http", "metrics"]
        assert first.ports[1].app_protocol == "http"
        assert second.ports[0].protocol is PortProtocol.UDP
        assert second.ports[0].name is None

    def test_from_manifest_dispatches(self):
        assert isinstance(from_manifest(ENDPOINTS_MANIFEST), Endpoints)

    def test_from_manifest_unknown_kind(self):
        assert from_manifest({"apiVersion": "v1", "kind": "TokenRequest"}) is None

    def test_nested_rejection_path(self):
        """Test that a rejected subset is reported at its position in Endpoints."""
        manifest = manifest_with_ports([{"name": "web", "port": 80}, {"name": "web", "port": 443}])

        with pytest.raises(ConstraintViolation) as exc_info:
            from_manifest(manifest)

        violation = exc_info.value.violations[0]
        assert violation.id == "has_unique_port_names"
        assert violation.location == "Endpoints.subsets[1].ports"

    def test_nested_port_rejection_path(self):
        manifest = manifest_with_ports([{"name": "web", "port": 0}])

        with pytest.raises(ConstraintViolation) as exc_info:
            from_manifest(manifest)

        assert exc_info.value.violations[0].location == "Endpoints.subsets[1].ports[0].port"


class TestLoadErrors:
    """Tests for schema conformance while loading."""

    def test_wrong_port_type(self):
        with pytest.raises(SchemaLoadError) as exc_info:
            from_manifest(manifest_with_ports([{"name": "web", "port": "80"}]))

        assert exc_info.value.path == ["Endpoints", "subsets", "1", "ports", "0", "port"]

    def test_bool_is_not_an_integer(self):
        with pytest.raises(SchemaLoadError) as exc_info:
            from_manifest(manifest_with_ports([{"name": "web", "port": True}]))

        assert exc_info.value.path == ["Endpoints", "subsets", "1", "ports", "0", "port"]

    def test_ports_must_be_list(self):
        manifest = manifest_with_ports({"name": "web", "port": 80})

        with pytest.raises(SchemaLoadError) as exc_info:
            from_manifest(manifest)

        assert exc_info.value.path == ["Endpoints", "subsets", "1", "ports"]

    def test_label_values_must_be_strings(self):
        """Test that metadata labels are type-checked before any record is built."""
        manifest = {"apiVersion": "v1", "kind": "Endpoints", "metadata": {"labels": {"a": 1}}}

        with pytest.raises(SchemaLoadError) as exc_info:
            from_manifest(manifest)

        assert exc_info.value.path == ["Endpoints", "metadata", "labels", "a"]

    def test_annotation_values_must_be_strings(self):
        manifest = {"apiVersion": "v1", "kind": "Endpoints", "metadata": {"annotations": {"note": ["x"]}}}

        with pytest.raises(SchemaLoadError) as exc_info:
            from_manifest(manifest)

        assert exc_info.value.path[:3] == ["Endpoints", "metadata", "annotations"]

    def test_unknown_kind_is_not_schema_checked(self):
        assert from_manifest({"apiVersion": "v1", "kind": "TokenRequest", "spec": 1}) is None

    def test_missing_port(self):
        with pytest.raises(SchemaLoadError, match="missing required field"):
            EndpointPort.from_dict({"name": "web"})

    def test_unknown_protocol(self):
        with pytest.raises(SchemaLoadError, match="unknown protocol 'HTTP'"):
            EndpointPort.from_dict({"port": 80, "protocol": "HTTP"})

    def test_from_dict_leaves_port_checks_to_rules(self):
        """Test that from_dict only converts: a bool port reaches the range rule."""
        with pytest.raises(ConstraintViolation) as exc_info:
            EndpointPort.from_dict({"port": True})

        assert exc_info.value.rule_names == ["is_valid_port_number"]

    def test_manifest_must_be_mapping(self):
        with pytest.raises(SchemaLoadError, match="expected mapping"):
            from_manifest(["not", "a", "mapping"])

    def test_kind_mismatch(self):
        with pytest.raises(SchemaLoadError) as exc_info:
            Endpoints.from_dict({"apiVersion": "v1", "kind": "Service"})

        assert exc_info.value.path == ["Endpoints", "kind"]
