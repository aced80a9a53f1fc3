"""Rule model for named field predicates."""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol


class Predicate(Protocol):
    """Pure boolean check over a single field value.

    A predicate must be deterministic and side-effect free: given the same
    value it always returns the same result.
    """

    def __call__(self, value: Any) -> bool:
        ...


@dataclass(frozen=True)
class Rule:
    """A named predicate attached to a record field.

    Attributes:
        name: Rule name reported in violations (e.g., "has_unique_port_names")
        predicate: The boolean check, called with the field value
        description: One-line summary of the invariant the rule enforces
    """

    name: str
    predicate: Predicate
    description: str = ""

    def __call__(self, value: Any) -> bool:
        return bool(self.predicate(value))


_REGISTRY: Dict[str, Rule] = {}


def rule(name: Optional[str] = None, description: Optional[str] = None) -> Callable[[Predicate], Rule]:
    """Decorator turning a predicate function into a registered ``Rule``.

    The rule name defaults to the function name and the description to the
    first line of its docstring.

    Example:
        >>> @rule()
        ... def is_positive(value):
        ...     \"\"\"Value is greater than zero.\"\"\"
        ...     return value > 0
        >>> is_positive(3)
        True
    """

    def decorator(func: Predicate) -> Rule:
        doc = (getattr(func, "__doc__", None) or "").strip()
        created = Rule(
            name=name or func.__name__,
            predicate=func,
            description=description if description is not None else doc.split("\n")[0],
        )
        _REGISTRY[created.name] = created
        return created

    return decorator


def registered_rules() -> List[Rule]:
    """Return every rule created through ``rule``, sorted by name."""
    return [_REGISTRY[key] for key in sorted(_REGISTRY)]
