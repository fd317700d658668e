"""
Composition Inspector: read-only diagnostics for a property list.

Answers, before (or instead of) constructing a record:
    - Which properties would apply, and which would be skipped
    - Which fields are written more than once (last write wins)
    - Which required fields are still missing
    - Which optional fields would stay at their blank value

IMPORTANT: This does NOT construct or return a record and never raises for
bad properties. It only produces a report.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Set

from compinit.fields import Field, blank_of, fields_of, required_fields
from compinit.properties import PartialProperty


@dataclass
class CompositionReport:
    """Outcome of folding a property list onto a record type's blank."""

    record_type_name: str
    total_properties: int = 0

    # Application
    applied_fields: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    write_counts: Dict[str, int] = field(default_factory=dict)

    # Requirements
    missing_required: List[str] = field(default_factory=list)
    unset_optional: List[str] = field(default_factory=list)

    warnings: List[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        """True if construct would succeed."""
        return not self.missing_required

    @property
    def overridden_fields(self) -> List[str]:
        return [name for name, count in self.write_counts.items() if count > 1]

    def add_warning(self, msg: str) -> None:
        if msg not in self.warnings:
            self.warnings.append(msg)


def inspect_properties(record_type: type, properties: Iterable[PartialProperty]) -> CompositionReport:
    """
    Inspect how `properties` would compose into a `record_type`.

    Runs the same left-to-right fold as construct on a private blank.
    """
    report = CompositionReport(record_type_name=record_type.__name__)
    properties = list(properties)
    report.total_properties = len(properties)

    selectors = fields_of(record_type)
    required = required_fields(record_type)

    # =========================================================================
    # 1. APPLICATION
    # =========================================================================

    record = blank_of(record_type)
    write_counts: Dict[str, int] = defaultdict(int)
    touched: Set[Field] = set()

    for index, prop in enumerate(properties):
        record, did_change = prop.apply(record)
        if not did_change:
            report.skipped.append(f"#{index} {prop.field}")
            continue
        touched.add(prop.field)
        write_counts[prop.field.name] += 1
        if prop.field.name not in report.applied_fields:
            report.applied_fields.append(prop.field.name)

    report.write_counts = dict(write_counts)

    # =========================================================================
    # 2. REQUIREMENTS
    # =========================================================================

    report.missing_required = [f.name for f in required if f not in touched]
    required_names = {f.name for f in required}
    report.unset_optional = [
        name for name, sel in selectors.items()
        if name not in required_names and sel not in touched
    ]

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if report.missing_required:
        report.add_warning(
            f"Missing required fields: {', '.join(report.missing_required)}"
        )

    if report.skipped:
        report.add_warning(
            f"Skipped properties (wrong type or foreign field): {', '.join(report.skipped)}"
        )

    if report.overridden_fields:
        report.add_warning(
            f"Fields written more than once (last write wins): {', '.join(report.overridden_fields)}"
        )

    return report
