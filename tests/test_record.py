"""
Tests for the Composable mixin.
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from compinit.compose import MissingRequiredFields
from compinit.examples import Customer
from compinit.fields import RecordDefinitionError
from compinit.properties import PartialProperty, PropertyTypeError
from compinit.record import Composable


@dataclass(frozen=True)
class Profile(Composable):
    __required__ = ("handle",)

    handle: str = "anonymous"
    bio: Optional[str] = None


@dataclass(frozen=True)
class NoDefaults(Composable):
    value: int


def test_default_blank_uses_field_defaults():
    assert Profile.blank() == Profile(handle="anonymous", bio=None)


def test_default_blank_needs_defaults():
    """Records with fields lacking defaults must override blank()."""
    with pytest.raises(RecordDefinitionError):
        NoDefaults.blank()
    with pytest.raises(RecordDefinitionError):
        NoDefaults.compose()


def test_required_default_still_required():
    """A default value does not make a required field optional."""
    with pytest.raises(MissingRequiredFields):
        Profile.compose()
    assert Profile.compose(Profile.prop("handle", "anonymous")).handle == "anonymous"


def test_compose_variadic():
    customer = Customer.compose(
        Customer.prop("name", "Steve Jobs"),
        Customer.prop("zipcode", 97202),
        Customer.prop("address_line1", "Reed College"),
    )
    assert customer.zipcode == 97202


def test_compose_or_none():
    assert Customer.compose_or_none(Customer.prop("name", "Steve Jobs")) is None


def test_compose_strict():
    with pytest.raises(PropertyTypeError):
        Profile.compose(PartialProperty(Profile.field("handle"), 1), strict=True)


def test_clone_method():
    base = Customer(name="A", zipcode=1, address_line1="X", address_line2="")
    cloned = base.clone(Customer.prop("name", "B"), Customer.prop("address_line2", None))
    assert cloned == Customer(name="B", zipcode=1, address_line1="X", address_line2=None)
    assert base.name == "A"


def test_prop_is_typed():
    with pytest.raises(PropertyTypeError):
        Customer.prop("zipcode", "97202")


def test_field_helpers():
    assert list(Customer.fields()) == ["name", "zipcode", "address_line1", "address_line2"]
    assert [f.name for f in Customer.required_fields()] == ["name", "zipcode", "address_line1"]
    assert Customer.field("name").owner is Customer


def test_properties_starts_empty_list():
    props = Customer.properties()
    assert props.record_type is Customer
    assert len(props) == 0
