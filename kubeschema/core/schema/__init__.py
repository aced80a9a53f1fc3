"""
Core schema definitions for rules, violations and oracles.

These domain-agnostic protocols and dataclasses form the foundation
of the kubeschema system.

ValidatedRecord lives in kubeschema.core.schema.record; it depends on the
evaluator and is not re-exported here.
"""

from kubeschema.core.schema.rule import Rule, registered_rules, rule
from kubeschema.core.schema.violation import Violation, format_path
from kubeschema.core.schema.oracle import Oracle

__all__ = [
    "Oracle",
    "Rule",
    "Violation",
    "format_path",
    "registered_rules",
    "rule",
]
