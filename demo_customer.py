#!/usr/bin/env python3
"""
Demo: construct, inspect, clone and serialize a Customer record.
"""

from compinit.compose import MissingRequiredFields
from compinit.examples import Customer, build_example_customer
from compinit.mock import Mock, MockProperty, mock_records
from compinit.serialization import record_to_yaml


def main():
    print("=" * 70)
    print("COMPOSITIONAL INITIALIZATION DEMO")
    print("=" * 70)

    customer = build_example_customer()
    print(f"\nConstructed: {customer}")

    incomplete = Customer.properties().set("name", "Steve Jobs").set("zipcode", 97202)
    try:
        incomplete.construct()
    except MissingRequiredFields as e:
        print(f"\nConstruct failed as expected: {e}")

    report = incomplete.inspect()
    print("\nInspection of the incomplete list:")
    for i, warning in enumerate(report.warnings, 1):
        print(f"  {i}. {warning}")

    moved = customer.clone(Customer.prop("address_line2", "Box 42"))
    print(f"\nCloned with address_line2: {moved}")

    print("\nAs YAML:")
    print(record_to_yaml(moved))

    names = MockProperty(Customer.field("name"), mock=Mock.iterate(["Ada", "Grace", "Linus"]))
    batch = mock_records(
        Customer,
        [names, Customer.prop("zipcode", 97202), Customer.prop("address_line1", "Reed College")],
        count=3,
    )
    print("Mocked batch:")
    for record in batch:
        print(f"  {record}")


if __name__ == "__main__":
    main()
