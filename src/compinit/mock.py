"""
Mock-valued properties for building fixture records.

A Mock describes how a field value is produced rather than holding the
value itself:

    - single:    always the same value
    - iterate:   values[iteration], wrapping around
    - randomize: a random choice, reproducible when seeded
    - generate:  generator(initial_value, iteration), where the initial
                 value optionally comes from another Mock

A MockProperty resolves its mock when applied, so the same property list
can produce a series of distinct records (see mock_records).
"""

from __future__ import annotations

import dataclasses
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple, Type, TypeVar

from compinit.compose import construct
from compinit.properties import PartialProperty

R = TypeVar("R")


class MockError(Exception):
    """Raised when a Mock cannot produce a value."""
    pass


class CreationMethod(Enum):
    """How a Mock produces its value."""
    NONE = "none"
    SINGLE = "single"
    ITERATE = "iterate"
    RANDOMIZE = "randomize"
    GENERATE = "generate"


@dataclass(frozen=True)
class Mock:
    """
    Recipe for a field value.

    Use the constructors (single, iterate, randomize, generate) rather than
    building instances directly.

    Properties:
        method: CreationMethod
        values: Candidate values for ITERATE / RANDOMIZE, or the SINGLE value
        iteration: Position in a series of mocked records
        generator: Callable(initial_value, iteration) for GENERATE
        source: Optional Mock feeding the generator's initial value
        seed: Seed for RANDOMIZE; None draws from the global generator
    """

    method: CreationMethod = CreationMethod.NONE
    values: Tuple[Any, ...] = ()
    iteration: int = 0
    generator: Optional[Callable[[Any, int], Any]] = None
    source: Optional["Mock"] = None
    seed: Optional[int] = None

    @classmethod
    def none(cls) -> "Mock":
        return cls()

    @classmethod
    def single(cls, value: Any) -> "Mock":
        return cls(CreationMethod.SINGLE, values=(value,))

    @classmethod
    def iterate(cls, values: Sequence[Any], iteration: int = 0) -> "Mock":
        if not values:
            raise MockError("iterate needs at least one value")
        return cls(CreationMethod.ITERATE, values=tuple(values), iteration=iteration)

    @classmethod
    def randomize(cls, values: Sequence[Any], seed: Optional[int] = None, iteration: int = 0) -> "Mock":
        if not values:
            raise MockError("randomize needs at least one value")
        return cls(CreationMethod.RANDOMIZE, values=tuple(values), iteration=iteration, seed=seed)

    @classmethod
    def generate(cls, generator: Callable[[Any, int], Any], source: Optional["Mock"] = None,
                 iteration: int = 0) -> "Mock":
        return cls(CreationMethod.GENERATE, iteration=iteration, generator=generator, source=source)

    def advance(self, steps: int = 1) -> "Mock":
        """The same recipe, `steps` iterations later (sources advance too)."""
        source = self.source.advance(steps) if self.source is not None else None
        return dataclasses.replace(self, iteration=self.iteration + steps, source=source)

    def at(self, iteration: int) -> "Mock":
        return self.advance(iteration - self.iteration)

    def value(self) -> Any:
        if self.method is CreationMethod.SINGLE:
            return self.values[0]
        if self.method is CreationMethod.ITERATE:
            return self.values[self.iteration % len(self.values)]
        if self.method is CreationMethod.RANDOMIZE:
            if self.seed is None:
                return random.choice(self.values)
            return random.Random(f"{self.seed}:{self.iteration}").choice(self.values)
        if self.method is CreationMethod.GENERATE:
            initial = self.source.value() if self.source is not None else None
            return self.generator(initial, self.iteration)
        raise MockError("Mock has no creation method")


@dataclass(frozen=True)
class MockProperty(PartialProperty[R]):
    """
    A property whose value is drawn from a Mock each time it is applied.

    Built as MockProperty(field, mock). The mock is resolved before the
    field's type check, so a generator that returns the wrong type is
    skipped like any mismatched value.
    """

    value: Any = field(default=None, init=False)
    mock: Mock

    def __post_init__(self) -> None:
        if self.mock.method is CreationMethod.NONE:
            raise MockError(f"{self.field} needs a Mock with a creation method")

    def resolve(self) -> Any:
        return self.mock.value()

    def at(self, iteration: int) -> "MockProperty[R]":
        return dataclasses.replace(self, mock=self.mock.at(iteration))


def mock_records(record_type: Type[R], properties: Iterable[PartialProperty[R]], count: int) -> List[R]:
    """
    Construct `count` records from one property list.

    Record i is built with every MockProperty moved to iteration i; plain
    properties are applied unchanged.

    Raises:
        MissingRequiredFields: If the property list cannot construct a record
    """
    properties = list(properties)
    records = []
    for i in range(count):
        current = [p.at(i) if isinstance(p, MockProperty) else p for p in properties]
        records.append(construct(record_type, current))
    return records
