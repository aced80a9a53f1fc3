"""Base mix-in for records validated at construction time."""

from typing import ClassVar, List, Mapping, Sequence

from kubeschema.core.evaluator import enforce, evaluate
from kubeschema.core.schema.rule import Rule
from kubeschema.core.schema.violation import Violation


class ValidatedRecord:
    """Mix-in for dataclass records whose fields carry rules.

    Subclasses declare ``__field_rules__`` and are decorated with
    ``@dataclass(frozen=True)``. Rules run eagerly in ``__post_init__``; a
    failure raises ``ConstraintViolation`` and no instance is produced.

    Example:
        >>> @dataclass(frozen=True)
        ... class Subset(ValidatedRecord):
        ...     __field_rules__ = {"ports": (has_unique_port_names,)}
        ...     ports: Sequence[EndpointPort] = ()
    """

    __field_rules__: ClassVar[Mapping[str, Sequence[Rule]]] = {}

    def __post_init__(self) -> None:
        enforce(self)

    def validate(self) -> List[Violation]:
        """Re-evaluate the rules and return the violations (always empty for a built record)."""
        return evaluate(self)
