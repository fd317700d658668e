"""
Field Selectors and the Record Type Contract

A field selector is a typed, comparable handle for one field of a record
type. It is the only identifier that crosses the boundary between callers
and the composer.

Defines:
    - Field (the selector)
    - matches_type (the single runtime check used before assignment)
    - fields_of / selector (enumeration and lookup)
    - required_fields / blank_of (what a record type must declare)

ARCHITECTURAL RULE:
    Required-ness is DECLARED, never inferred.
    A record type lists its required fields in `__required__`.
    Whether a field's type happens to be Optional is only used to reject
    contradictory declarations, not to discover requirements.
"""

from __future__ import annotations

import copy
import dataclasses
import functools
import types
import typing
import warnings
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, Mapping, Tuple, TypeVar

R = TypeVar("R")
V = TypeVar("V")


class FieldError(Exception):
    """Base class for selector and record-definition problems."""
    pass


class UnknownFieldError(FieldError):
    """Raised when a record type has no selectable field of the given name."""
    pass


class RecordDefinitionError(FieldError):
    """Raised when a record type does not honour the composition contract."""
    pass


_UNION_TYPES = (typing.Union, types.UnionType)


def accepts_none(tp: Any) -> bool:
    """True if `tp` admits an explicit absent value."""
    if tp is Any or tp is object or tp is type(None) or tp is None:
        return True
    if typing.get_origin(tp) in _UNION_TYPES:
        return any(accepts_none(arg) for arg in typing.get_args(tp))
    return False


def matches_type(value: Any, tp: Any) -> bool:
    """
    Check a dynamically typed value against a declared field type.

    This is the one checked cast at the boundary between erased properties
    and concrete records.

    Rules:
        - Any / object accept everything
        - None only matches types that admit None
        - Unions match if any member matches
        - Literal[...] matches its listed values
        - Parameterised generics match on their origin (List[int] -> list)
        - bool does not match int or float
    """
    if tp is Any or tp is object:
        return True
    if value is None:
        return accepts_none(tp)

    origin = typing.get_origin(tp)
    if origin in _UNION_TYPES:
        return any(matches_type(value, arg) for arg in typing.get_args(tp))
    if origin is typing.Literal:
        return value in typing.get_args(tp)
    if origin is not None:
        tp = origin

    if isinstance(tp, TypeVar):
        return True
    if not isinstance(tp, type):
        # NewType and other non-class annotations
        supertype = getattr(tp, "__supertype__", None)
        if supertype is not None:
            return matches_type(value, supertype)
        return True

    if isinstance(value, bool) and tp in (int, float):
        return False
    return isinstance(value, tp)


@dataclass(frozen=True)
class Field(Generic[R, V]):
    """
    Selects one field of a record type.

    Two selectors are equal iff they name the same field of the same
    record type. The declared value type is carried for runtime checks
    but does not take part in equality or hashing.

    Properties:
        owner: The record type (a dataclass)
        name: Attribute name on the record
        value_type: Resolved type annotation of the field

    Example:
        name = Field(Customer, "name", str)
        name.apply("Steve Jobs", to=customer)
    """

    owner: type
    name: str
    value_type: Any = field(default=Any, compare=False, repr=False)

    def __str__(self) -> str:
        return f"{self.owner.__name__}.{self.name}"

    @property
    def optional(self) -> bool:
        return accepts_none(self.value_type)

    def accepts(self, value: Any) -> bool:
        return matches_type(value, self.value_type)

    def apply(self, value: Any, to: R) -> Tuple[R, bool]:
        """
        Return a new record with this field set to `value`.

        If `to` is not exactly of the owner type, or `value` does not match
        the declared type, `to` is returned unchanged with did_change False.
        The input record is never mutated.
        """
        if type(to) is not self.owner or not self.accepts(value):
            return to, False
        return dataclasses.replace(to, **{self.name: value}), True


def _resolve_hints(record_type: type) -> Mapping[str, Any]:
    try:
        return typing.get_type_hints(record_type)
    except (NameError, TypeError) as e:
        warnings.warn(
            f"Could not resolve annotations of {record_type.__name__}: {e}; "
            f"unresolved fields accept any value",
            UserWarning,
        )
        return {}


@functools.lru_cache(maxsize=None)
def fields_of(record_type: type) -> Mapping[str, Field]:
    """
    Enumerate the selectable fields of a record type, in declaration order.

    Only dataclass fields that can be passed to the constructor are
    selectable; `init=False` fields cannot be set by replacement.

    Raises:
        RecordDefinitionError: If `record_type` is not a dataclass
    """
    if not (isinstance(record_type, type) and dataclasses.is_dataclass(record_type)):
        raise RecordDefinitionError(f"{record_type!r} is not a dataclass type")

    hints = _resolve_hints(record_type)
    selectors = {}
    for f in dataclasses.fields(record_type):
        if not f.init:
            continue
        value_type = hints.get(f.name, Any)
        selectors[f.name] = Field(record_type, f.name, value_type)
    return MappingProxyType(selectors)


def selector(record_type: type, name: str) -> Field:
    """
    Look up a field selector by name.

    Raises:
        UnknownFieldError: If the record type has no such selectable field
    """
    try:
        return fields_of(record_type)[name]
    except KeyError:
        raise UnknownFieldError(f"{record_type.__name__} has no field '{name}'") from None


@functools.lru_cache(maxsize=None)
def required_fields(record_type: type) -> Tuple[Field, ...]:
    """
    Resolve the statically declared required fields of a record type.

    `__required__` holds field names or Field selectors. Every entry must
    name a selectable field whose type does not admit None: a required
    field is by definition never absent.

    Returns:
        Selectors in declaration order (duplicates removed)

    Raises:
        RecordDefinitionError: On a malformed or contradictory declaration
    """
    declared = getattr(record_type, "__required__", ())
    if isinstance(declared, str):
        raise RecordDefinitionError(
            f"{record_type.__name__}.__required__ must be a sequence of field names, "
            f"not the string {declared!r}"
        )

    resolved = []
    for entry in declared:
        if isinstance(entry, Field):
            if entry.owner is not record_type:
                raise RecordDefinitionError(
                    f"{record_type.__name__}.__required__ lists foreign field {entry}"
                )
            name = entry.name
        else:
            name = entry
        try:
            sel = selector(record_type, name)
        except UnknownFieldError as e:
            raise RecordDefinitionError(str(e)) from e
        if sel.optional:
            raise RecordDefinitionError(
                f"{sel} is declared required but its type admits None"
            )
        if sel not in resolved:
            resolved.append(sel)
    return tuple(resolved)


def blank_of(record_type: type) -> Any:
    """
    Return a fresh copy of a record type's blank instance.

    `blank` may be a classmethod/staticmethod returning the instance, or a
    class attribute holding one. The result is deep-copied so composition
    never aliases the canonical blank.

    Raises:
        RecordDefinitionError: If no blank is defined or it has the wrong type
    """
    blank = getattr(record_type, "blank", None)
    if blank is None:
        raise RecordDefinitionError(f"{record_type.__name__} does not define a blank instance")
    instance = blank() if callable(blank) else blank
    if not isinstance(instance, record_type):
        raise RecordDefinitionError(
            f"{record_type.__name__}.blank produced {type(instance).__name__}, "
            f"expected {record_type.__name__}"
        )
    return copy.deepcopy(instance)
