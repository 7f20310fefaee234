"""Plain-text rendering of aggregation results."""

from __future__ import annotations

from ocinfo.aggregate import AggregationResult


def render_header(result: AggregationResult) -> str:
    return (
        f"Found {result.distinct_count} {result.key.label} "
        f"for {result.active_count} active components:"
    )


def render_body(result: AggregationResult) -> str:
    """One ``* value (count)`` entry per value, sorted by value.

    With details, each entry is followed by one ``\\t* name@version`` line
    per contributor, in the order they were aggregated.
    """
    entries = []
    for value in sorted(result.values):
        summary = result.values[value]
        lines = [f"* {value} ({summary.count})"]
        if result.with_details:
            lines.extend(f"\t* {contributor}" for contributor in summary.contributors)
        entries.append("\n".join(lines))
    return "\n".join(entries)


def render_report(result: AggregationResult) -> str:
    body = render_body(result)
    header = render_header(result)
    return f"{header}\n{body}" if body else header
