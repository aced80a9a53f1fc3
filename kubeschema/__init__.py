"""
kubeschema: Kubernetes resource schema records with construction-time rules

Typed records for Kubernetes API resources whose fields carry named predicate
rules. Rules are evaluated eagerly when a record is built and a failing rule
rejects the whole record with a diagnostic naming the rule and field.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
