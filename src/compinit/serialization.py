"""
Serialization helpers for property lists and records.

Provides JSON/YAML round-trip via an intermediate dict representation:

    {"record": "Customer",
     "properties": [{"field": "name", "value": "Steve Jobs"}, ...]}

Values must themselves be JSON/YAML compatible. Mock properties are
resolved to their current value when written.
"""
from __future__ import annotations

import json
import warnings
from typing import Any, Dict, Iterable, List, Type, TypeVar

import yaml

from compinit.compose import construct, decompose
from compinit.fields import selector
from compinit.properties import PartialProperty, Property

R = TypeVar("R")


class PropertySerializationError(Exception):
    """Raised when serialized properties cannot be read back."""
    pass


def property_to_dict(p: PartialProperty) -> Dict[str, Any]:
    return {"field": p.field.name, "value": p.resolve()}


def property_from_dict(record_type: type, d: Dict[str, Any]) -> PartialProperty:
    if not isinstance(d, dict) or "field" not in d:
        raise PropertySerializationError(f"Malformed property entry: {d!r}")
    sel = selector(record_type, d["field"])
    value = d.get("value")
    if value is not None and not sel.accepts(value):
        warnings.warn(f"Value {value!r} does not match {sel}; it will be skipped on apply", UserWarning)
        return PartialProperty(sel, value)
    return Property(sel, value)


def properties_to_dict(record_type: type, properties: Iterable[PartialProperty]) -> Dict[str, Any]:
    return {
        "record": record_type.__name__,
        "properties": [property_to_dict(p) for p in properties],
    }


def properties_from_dict(record_type: Type[R], d: Dict[str, Any]) -> List[PartialProperty[R]]:
    if not isinstance(d, dict):
        raise PropertySerializationError(f"Expected a mapping, got {type(d).__name__}")
    name = d.get("record")
    if name != record_type.__name__:
        raise PropertySerializationError(f"Properties are for {name!r}, not {record_type.__name__!r}")
    entries = d.get("properties", [])
    if not isinstance(entries, list):
        raise PropertySerializationError(f"'properties' must be a list, got {type(entries).__name__}")
    return [property_from_dict(record_type, entry) for entry in entries]


def properties_to_json(record_type: type, properties: Iterable[PartialProperty]) -> str:
    return json.dumps(properties_to_dict(record_type, properties), sort_keys=True)


def properties_from_json(record_type: Type[R], s: str) -> List[PartialProperty[R]]:
    return properties_from_dict(record_type, json.loads(s))


def properties_to_yaml(record_type: type, properties: Iterable[PartialProperty]) -> str:
    return yaml.safe_dump(properties_to_dict(record_type, properties), sort_keys=False)


def properties_from_yaml(record_type: Type[R], s: str) -> List[PartialProperty[R]]:
    return properties_from_dict(record_type, yaml.safe_load(s))


def record_to_dict(record: Any) -> Dict[str, Any]:
    return {p.field.name: p.value for p in decompose(record)}


def record_from_dict(record_type: Type[R], d: Dict[str, Any]) -> R:
    """Build a record from a flat mapping; required fields are enforced."""
    return construct(record_type, [property_from_dict(record_type, {"field": k, "value": v}) for k, v in d.items()])


def record_to_json(record: Any) -> str:
    return json.dumps(record_to_dict(record), sort_keys=True)


def record_from_json(record_type: Type[R], s: str) -> R:
    return record_from_dict(record_type, json.loads(s))


def record_to_yaml(record: Any) -> str:
    return yaml.safe_dump(record_to_dict(record), sort_keys=False)


def record_from_yaml(record_type: Type[R], s: str) -> R:
    return record_from_dict(record_type, yaml.safe_load(s))
