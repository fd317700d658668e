"""
Composable: opt-in mixin for record types.

A record type is a frozen dataclass that declares:
    - a blank instance (all fields populated with placeholders)
    - its required fields, by name, in `__required__`

    @dataclass(frozen=True)
    class Customer(Composable):
        __required__ = ("name", "zipcode")

        name: str = ""
        zipcode: int = 0
        note: Optional[str] = None

    Customer.compose(Customer.prop("name", "Ada"), Customer.prop("zipcode", 1))

The mixin only adds class-level shortcuts over compinit.fields and
compinit.compose; records that do not inherit it work with the plain
functions as long as they provide `blank` and `__required__`.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, Optional, Tuple, Type, TypeVar, Union

from compinit import compose
from compinit.builder import PropertyList
from compinit.fields import Field, RecordDefinitionError, fields_of, required_fields, selector
from compinit.properties import PartialProperty, Property

C = TypeVar("C", bound="Composable")


class Composable:
    """
    Mixin for records built by composition.

    NOTE:
        Declare `__required__` as a plain class attribute (or ClassVar);
        an annotated attribute would become a dataclass field.
    """

    __required__: ClassVar[Tuple[Union[str, Field], ...]] = ()

    @classmethod
    def blank(cls: Type[C]) -> C:
        """Default blank: the record built from its field defaults."""
        try:
            return cls()
        except TypeError as e:
            raise RecordDefinitionError(
                f"{cls.__name__} has fields without defaults; override blank()"
            ) from e

    @classmethod
    def field(cls, name: str) -> Field:
        return selector(cls, name)

    @classmethod
    def fields(cls) -> Mapping[str, Field]:
        return fields_of(cls)

    @classmethod
    def required_fields(cls) -> Tuple[Field, ...]:
        return required_fields(cls)

    @classmethod
    def prop(cls, name: str, value: Any) -> Property:
        return Property(selector(cls, name), value)

    @classmethod
    def properties(cls: Type[C]) -> PropertyList[C]:
        return PropertyList(cls)

    @classmethod
    def compose(cls: Type[C], *properties: PartialProperty[C], strict: bool = False) -> C:
        return compose.construct(cls, properties, strict=strict)

    @classmethod
    def compose_or_none(cls: Type[C], *properties: PartialProperty[C], strict: bool = False) -> Optional[C]:
        return compose.construct_or_none(cls, properties, strict=strict)

    def clone(self: C, *mutations: PartialProperty[C], strict: bool = False) -> C:
        return compose.clone(self, mutations, strict=strict)
