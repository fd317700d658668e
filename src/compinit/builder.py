"""
PropertyList: an immutable, fluent way to assemble properties.

    props = (
        PropertyList(Customer)
        .set("name", "Steve Jobs")
        .set("zipcode", 97202)
    )
    customer = props.set("address_line1", "Reed College").construct()

Every call returns a new list; the original is never modified.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Iterable, Iterator, Optional, Tuple, Type, TypeVar, Union

from compinit.compose import clone, construct, construct_or_none
from compinit.fields import Field, UnknownFieldError, selector
from compinit.inspection import CompositionReport, inspect_properties
from compinit.properties import PartialProperty, Property

R = TypeVar("R")


@dataclass(frozen=True)
class PropertyList(Generic[R]):
    """
    Ordered properties for one record type.

    Properties:
        record_type: Record type all properties target
        properties: The properties, in application order
    """

    record_type: Type[R]
    properties: Tuple[PartialProperty[R], ...] = ()

    def __iter__(self) -> Iterator[PartialProperty[R]]:
        return iter(self.properties)

    def __len__(self) -> int:
        return len(self.properties)

    def _check_owner(self, prop: PartialProperty) -> None:
        if prop.field.owner is not self.record_type:
            raise UnknownFieldError(
                f"{prop.field} does not belong to {self.record_type.__name__}"
            )

    def set(self, field: Union[Field, str], value: Any) -> "PropertyList[R]":
        """Append a typed property; raises PropertyTypeError on a mismatched value."""
        sel = selector(self.record_type, field) if isinstance(field, str) else field
        prop = Property(sel, value)
        self._check_owner(prop)
        return PropertyList(self.record_type, self.properties + (prop,))

    def extend(self, properties: Iterable[PartialProperty[R]]) -> "PropertyList[R]":
        added = tuple(properties)
        for prop in added:
            self._check_owner(prop)
        return PropertyList(self.record_type, self.properties + added)

    def construct(self, strict: bool = False) -> R:
        return construct(self.record_type, self.properties, strict=strict)

    def construct_or_none(self, strict: bool = False) -> Optional[R]:
        return construct_or_none(self.record_type, self.properties, strict=strict)

    def apply_to(self, base: R, strict: bool = False) -> R:
        return clone(base, self.properties, strict=strict)

    def inspect(self) -> CompositionReport:
        return inspect_properties(self.record_type, self.properties)
