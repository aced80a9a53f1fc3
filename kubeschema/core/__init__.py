"""
Core domain-agnostic components for kubeschema.

This package contains the rule and violation schemas, the constraint
evaluator and the verifier that work across different resource families.
"""

__all__ = []
