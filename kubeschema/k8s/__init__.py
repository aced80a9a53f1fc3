"""Kubernetes (K8s) resource records for kubeschema.

This package provides the K8s side of the constraint evaluator:
- Rules: port name uniqueness/presence, DNS labels, port ranges, protocols
- Resources: Endpoints and its nested records, validated on construction
- K8sArtifact and ConstraintOracle: YAML manifests in, Violations out
"""
