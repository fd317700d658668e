"""
Example record used in documentation, demos and tests.

Customer has three required fields and one optional address line. Its
blank carries placeholders that construction must overwrite.
"""
from dataclasses import dataclass
from typing import Optional

from compinit.record import Composable


@dataclass(frozen=True)
class Customer(Composable):
    __required__ = ("name", "zipcode", "address_line1")

    name: str
    zipcode: int
    address_line1: str
    address_line2: Optional[str] = None

    @classmethod
    def blank(cls) -> "Customer":
        return cls(name="", zipcode=0, address_line1="", address_line2="")


def build_example_customer(include_address: bool = True) -> Customer:
    props = (
        Customer.properties()
        .set("name", "Steve Jobs")
        .set("zipcode", 97202)
    )
    if include_address:
        props = props.set("address_line1", "Reed College")
    return props.construct()
