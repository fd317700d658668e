"""
compinit: Compositional Initialization for Immutable Records

Build and clone frozen dataclass records from ordered, typed
field/value pairs.

ARCHITECTURAL GUARANTEE:
------------------------
    - Records are never mutated; every operation returns a new instance
    - Required fields are declared by the record type, never inferred
    - Applying a property never raises; a value of the wrong type is skipped
    - Only construct can fail, and only with MissingRequiredFields

Layers:
    fields       -> selectors and the record type contract
    properties   -> Property / PartialProperty value objects
    compose      -> construct / clone
    record       -> Composable mixin
    builder      -> PropertyList
    mock         -> mock-valued properties for fixtures
    inspection   -> read-only composition reports
    serialization-> dict / JSON / YAML
"""

__version__ = "0.1.0"
