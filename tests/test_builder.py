"""
Tests for the PropertyList builder.
"""

from dataclasses import dataclass

import pytest

from compinit.builder import PropertyList
from compinit.compose import MissingRequiredFields
from compinit.examples import Customer
from compinit.fields import UnknownFieldError, selector
from compinit.properties import PartialProperty, PropertyTypeError


@dataclass(frozen=True)
class Supplier:
    name: str = ""


class TestPropertyList:
    """Test building property lists."""

    def test_set_returns_new_list(self):
        empty = PropertyList(Customer)
        one = empty.set("name", "Ada")
        assert len(empty) == 0
        assert len(one) == 1

    def test_order_preserved(self):
        props = PropertyList(Customer).set("name", "a").set("zipcode", 1).set("name", "b")
        assert [(p.field.name, p.value) for p in props] == [("name", "a"), ("zipcode", 1), ("name", "b")]

    def test_set_with_selector(self):
        props = PropertyList(Customer).set(Customer.field("zipcode"), 5)
        assert props.properties[0].field == Customer.field("zipcode")

    def test_set_checks_type(self):
        with pytest.raises(PropertyTypeError):
            PropertyList(Customer).set("zipcode", "5")

    def test_unknown_name(self):
        with pytest.raises(UnknownFieldError):
            PropertyList(Customer).set("email", "a@b.c")

    def test_foreign_selector_rejected(self):
        with pytest.raises(UnknownFieldError):
            PropertyList(Customer).set(selector(Supplier, "name"), "Acme")

    def test_extend(self):
        props = PropertyList(Customer).extend([
            Customer.prop("name", "Ada"),
            PartialProperty(Customer.field("zipcode"), "unchecked"),
        ])
        assert len(props) == 2

    def test_extend_rejects_foreign(self):
        with pytest.raises(UnknownFieldError):
            PropertyList(Customer).extend([PartialProperty(selector(Supplier, "name"), "Acme")])


class TestDelegation:
    """Test that the builder hands off to the composer."""

    def test_construct(self):
        customer = (
            PropertyList(Customer)
            .set("name", "Steve Jobs")
            .set("zipcode", 97202)
            .set("address_line1", "Reed College")
            .construct()
        )
        assert customer.address_line1 == "Reed College"

    def test_construct_missing(self):
        props = PropertyList(Customer).set("name", "Steve Jobs")
        with pytest.raises(MissingRequiredFields):
            props.construct()
        assert props.construct_or_none() is None

    def test_apply_to(self):
        base = Customer(name="A", zipcode=1, address_line1="X", address_line2="")
        cloned = PropertyList(Customer).set("name", "B").apply_to(base)
        assert cloned.name == "B"
        assert cloned.zipcode == 1

    def test_inspect(self):
        report = PropertyList(Customer).set("name", "Ada").inspect()
        assert report.missing_required == ["zipcode", "address_line1"]
