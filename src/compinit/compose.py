"""
Composer: construct and clone records from properties.

Both operations are a strict left-to-right fold of properties onto a base
record. They differ only in the base and in validation:

    construct: base = fresh blank, every required field must be set
               explicitly by this pass, all-or-nothing
    clone:     base = existing record, no validation, never fails

Later properties targeting the same field win.
"""

from __future__ import annotations

import copy
import logging
from typing import Iterable, List, Optional, Set, Tuple, Type, TypeVar

from compinit.fields import Field, blank_of, fields_of, required_fields
from compinit.properties import PartialProperty, PropertyTypeError

logger = logging.getLogger(__name__)

R = TypeVar("R")


class MissingRequiredFields(Exception):
    """
    Raised by construct when required fields were never set.

    Properties:
        record_type: The record type being constructed
        missing: Selectors of the missing fields, in declaration order
    """

    def __init__(self, record_type: type, missing: Tuple[Field, ...]):
        self.record_type = record_type
        self.missing = tuple(missing)
        super().__init__(
            f"Cannot construct {record_type.__name__}: "
            f"missing required properties: {', '.join(self.names)}"
        )

    @property
    def names(self) -> Tuple[str, ...]:
        return tuple(f.name for f in self.missing)


def _fold(record: R, properties: Iterable[PartialProperty], strict: bool) -> Tuple[R, Set[Field]]:
    """Apply properties in order, returning the result and the fields set."""
    touched: Set[Field] = set()
    for prop in properties:
        record, did_change = prop.apply(record)
        if did_change:
            touched.add(prop.field)
            continue
        if strict:
            raise PropertyTypeError(f"{prop.field} cannot be set to {prop.resolve()!r} on {type(record).__name__}")
        logger.debug("Skipped %s: value %r does not apply", prop.field, prop.resolve())
    return record, touched


def construct(record_type: Type[R], properties: Iterable[PartialProperty[R]], strict: bool = False) -> R:
    """
    Build a new record from its blank and an ordered list of properties.

    A required field counts as set only if some property in this call
    applied to it; a blank value that happens to be correct does not count.

    Args:
        record_type: Record type honouring the composition contract
        properties: Properties applied left to right
        strict: Raise PropertyTypeError instead of skipping a property
            that does not apply

    Returns:
        The new record

    Raises:
        MissingRequiredFields: If any declared required field was not set
        RecordDefinitionError: If the record type is malformed
    """
    required = required_fields(record_type)
    record, touched = _fold(blank_of(record_type), properties, strict)

    missing = tuple(f for f in required if f not in touched)
    if missing:
        logger.debug("Construct %s failed, missing %s", record_type.__name__, [f.name for f in missing])
        raise MissingRequiredFields(record_type, missing)
    return record


def construct_or_none(record_type: Type[R], properties: Iterable[PartialProperty[R]], strict: bool = False) -> Optional[R]:
    """Like construct, but return None when required fields are missing."""
    try:
        return construct(record_type, properties, strict=strict)
    except MissingRequiredFields:
        return None


def clone(base: R, mutations: Iterable[PartialProperty[R]], strict: bool = False) -> R:
    """
    Functional record update: a copy of `base` with `mutations` applied.

    `base` is assumed valid, so no required-field check is made. Mutations
    that do not apply (wrong type, foreign field) leave their field as in
    `base`. Explicit None is applied like any other value.
    """
    record, _ = _fold(copy.deepcopy(base), mutations, strict)
    return record


def decompose(record: R) -> List[PartialProperty[R]]:
    """One property per selectable field of `record`, in declaration order."""
    return [
        PartialProperty(sel, getattr(record, name))
        for name, sel in fields_of(type(record)).items()
    ]
