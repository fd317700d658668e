"""
Property Value Objects

A property is "set field F of record R to value V" as a first-class value.

    - Property[R, V]: statically typed, checked when constructed
    - PartialProperty[R]: value type erased, so properties of differing
      value types can share one ordered sequence

Both are frozen, plain data: a selector and a value. There is no
captured closure. Application is dispatched through the selector
(Field.apply), which performs the single runtime type check.

IMPORTANT:
    Applying a property never raises and never mutates its target.
    A value that does not fit the field is reported as did_change=False.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, Tuple, TypeVar

from compinit.fields import Field

R = TypeVar("R")
V = TypeVar("V")


class PropertyTypeError(TypeError):
    """Raised when a value cannot be assigned to a field's declared type."""
    pass


@dataclass(frozen=True)
class PartialProperty(Generic[R]):
    """
    A property whose value type has been erased.

    Construction performs no check: the value is only tested against the
    field's real type when the property is applied.

    Properties:
        field: Selector of the target field (still tied to R)
        value: Any value, or None for an explicit "set to empty"
    """

    field: Field[R, Any]
    value: Any = None

    def resolve(self) -> Any:
        """Value to assign when this property is applied."""
        return self.value

    def apply(self, to: R) -> Tuple[R, bool]:
        return self.field.apply(self.resolve(), to)

    def apply_value(self, value: Any, to: R) -> Tuple[R, bool]:
        return self.field.apply(value, to)


@dataclass(frozen=True)
class Property(PartialProperty[R], Generic[R, V]):
    """
    A statically typed property.

    The value is checked against the field type at construction. None is
    always accepted here: whether an explicit absent value applies is
    decided by the field type when the property is applied.

    Example:
        Property(Customer.field("zipcode"), 97202)
        Property(Customer.field("zipcode"), "97202")  # PropertyTypeError
    """

    field: Field[R, V]
    value: Optional[V] = None

    def __post_init__(self) -> None:
        if self.value is not None and not self.field.accepts(self.value):
            raise PropertyTypeError(
                f"{self.field} expects {_type_name(self.field.value_type)}, "
                f"got {type(self.value).__name__}: {self.value!r}"
            )

    @property
    def partial(self) -> PartialProperty[R]:
        return PartialProperty(self.field, self.value)


def _type_name(tp: Any) -> str:
    return getattr(tp, "__name__", None) or str(tp)
