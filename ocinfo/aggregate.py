"""Aggregation of component metadata into per-value counts.

The aggregation is a pure fold over the metadata list: no I/O, and the
counts do not depend on the order components arrive in. Contributor lists
keep the order components were folded in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import reduce
from typing import Iterable

from ocinfo.registry.models import AggregationKey, ComponentMetadata


@dataclass
class ValueSummary:
    """How many active components supply a value, and which ones."""

    count: int = 0
    contributors: list[str] = field(default_factory=list)


@dataclass
class AggregationResult:
    """Per-value summaries over the active components of a registry."""

    key: AggregationKey
    with_details: bool = False
    values: dict[str, ValueSummary] = field(default_factory=dict)
    active_count: int = 0

    @property
    def distinct_count(self) -> int:
        return len(self.values)

    def counts(self) -> dict[str, int]:
        return {value: summary.count for value, summary in self.values.items()}


def is_active(component: ComponentMetadata) -> bool:
    """A component counts as active when it is not deprecated and has an author."""
    return not component.is_deprecated and component.author is not None


def fold_component(acc: AggregationResult, component: ComponentMetadata) -> AggregationResult:
    """Add one component to the accumulator and return it."""
    if not is_active(component):
        return acc

    acc.active_count += 1
    for value in acc.key.extract(component):
        summary = acc.values.setdefault(value, ValueSummary())
        summary.count += 1
        if acc.with_details:
            summary.contributors.append(component.qualified_id)
    return acc


def aggregate(
    components: Iterable[ComponentMetadata],
    key: AggregationKey,
    with_details: bool = False,
) -> AggregationResult:
    """Summarize the values selected by *key* across the active components."""
    initial = AggregationResult(key=key, with_details=with_details)
    return reduce(fold_component, components, initial)
