"""
Tests for mock-valued properties.
"""

import pytest

from compinit.compose import MissingRequiredFields, construct
from compinit.examples import Customer
from compinit.mock import CreationMethod, Mock, MockError, MockProperty, mock_records

LETTERS = ["a", "b", "c", "d", "e"]


def gen(initial, index):
    return f"{initial if initial is not None else '2'}{index}"


def fixed_props():
    return [Customer.prop("zipcode", 97202), Customer.prop("address_line1", "Reed College")]


class TestMock:
    """Test Mock value recipes."""

    def test_single(self):
        assert Mock.single(7).value() == 7

    def test_iterate(self):
        assert Mock.iterate(LETTERS).value() == "a"
        assert Mock.iterate(LETTERS, iteration=3).value() == "d"

    def test_iterate_wraps(self):
        assert Mock.iterate(["a", "b", "c"], iteration=4).value() == "b"

    def test_seeded_randomize_is_reproducible(self):
        first = Mock.randomize(LETTERS, seed=42, iteration=3).value()
        second = Mock.randomize(LETTERS, seed=42, iteration=3).value()
        assert first == second
        assert first in LETTERS

    def test_unseeded_randomize_draws_from_values(self):
        for _ in range(20):
            assert Mock.randomize(LETTERS).value() in LETTERS

    def test_generate(self):
        assert Mock.generate(gen).value() == "20"

    def test_generate_with_source(self):
        mock = Mock.generate(gen, source=Mock.single("x"), iteration=3)
        assert mock.value() == "x3"

    def test_advance_moves_source(self):
        mock = Mock.generate(lambda v, i: f"{v}-{i}", source=Mock.iterate(["a", "b"]))
        assert mock.value() == "a-0"
        assert mock.advance().value() == "b-1"
        assert mock.at(2).value() == "a-2"

    def test_none_has_no_value(self):
        assert Mock.none().method is CreationMethod.NONE
        with pytest.raises(MockError):
            Mock.none().value()

    def test_empty_values_rejected(self):
        with pytest.raises(MockError):
            Mock.iterate([])
        with pytest.raises(MockError):
            Mock.randomize([])


class TestMockProperty:
    """Test MockProperty application."""

    def test_resolved_on_apply(self):
        prop = MockProperty(Customer.field("name"), mock=Mock.single("Ada"))
        customer = construct(Customer, [prop] + fixed_props())
        assert customer.name == "Ada"

    def test_requires_creation_method(self):
        with pytest.raises(MockError):
            MockProperty(Customer.field("name"), mock=Mock.none())

    def test_wrong_generated_type_is_skipped(self):
        prop = MockProperty(Customer.field("name"), mock=Mock.generate(lambda v, i: i))
        with pytest.raises(MissingRequiredFields) as excinfo:
            construct(Customer, [prop] + fixed_props())
        assert excinfo.value.names == ("name",)

    def test_mock_is_second_positional_argument(self):
        prop = MockProperty(Customer.field("name"), Mock.iterate(LETTERS))
        assert prop.mock.method is CreationMethod.ITERATE
        assert prop.resolve() == "a"
        assert prop.value is None

    def test_at(self):
        prop = MockProperty(Customer.field("name"), mock=Mock.iterate(LETTERS))
        assert prop.at(2).resolve() == "c"
        assert prop.resolve() == "a"


def test_mock_records_iterates():
    names = MockProperty(Customer.field("name"), mock=Mock.iterate(LETTERS))
    records = mock_records(Customer, [names] + fixed_props(), count=5)
    assert [r.name for r in records] == LETTERS
    assert all(r.zipcode == 97202 for r in records)


def test_mock_records_missing_required():
    names = MockProperty(Customer.field("name"), mock=Mock.iterate(LETTERS))
    with pytest.raises(MissingRequiredFields):
        mock_records(Customer, [names], count=2)
