"""Altair chart of funds held and distributed per case type."""

from collections.abc import Mapping
from decimal import Decimal

import altair as alt

from src.domain.models import CaseTypeTotals


HELD_LABEL = "Funds held"
DISTRIBUTED_LABEL = "Funds distributed"


def format_gbp(value: Decimal) -> str:
    """Format an amount as pounds sterling."""
    sign = "-" if value < 0 else ""
    return f"{sign}£{abs(value):,.2f}"


def prepare_case_type_chart_data(
    summary: Mapping[str, CaseTypeTotals],
) -> list[dict[str, str | float | int]]:
    """Return one chart record per case type and measure.

    Args:
        summary: Totals keyed by case type.

    Returns:
        Altair-ready records in case type order, held before distributed.
    """
    data: list[dict[str, str | float | int]] = []
    for case_type, totals in summary.items():
        for measure, amount in (
            (HELD_LABEL, totals.total_held),
            (DISTRIBUTED_LABEL, totals.total_distributed),
        ):
            data.append(
                {
                    "case_type": case_type,
                    "measure": measure,
                    "amount": float(amount),
                    "amount_label": format_gbp(amount),
                    "case_count": totals.case_count,
                }
            )
    return data


def build_case_type_chart(
    summary: Mapping[str, CaseTypeTotals],
    height: int = 360,
) -> alt.Chart:
    """Build a grouped bar chart of held vs distributed funds.

    Args:
        summary: Totals keyed by case type.
        height: Chart height in pixels.

    Returns:
        alt.Chart: Chart ready for ``st.altair_chart``.
    """
    data = prepare_case_type_chart_data(summary)
    return alt.Chart(alt.Data(values=data)).mark_bar(
        cornerRadiusTopLeft=4,
        cornerRadiusTopRight=4,
    ).encode(
        x=alt.X("case_type:N", title=None, sort=list(summary)),
        xOffset=alt.XOffset("measure:N"),
        y=alt.Y("amount:Q", title="Amount (£)"),
        color=alt.Color(
            "measure:N",
            scale=alt.Scale(
                domain=[HELD_LABEL, DISTRIBUTED_LABEL],
                range=["#1b9aaa", "#f4a261"],
            ),
            legend=alt.Legend(orient="bottom", title=None),
        ),
        tooltip=[
            alt.Tooltip("case_type:N", title="Case type"),
            alt.Tooltip("measure:N", title="Measure"),
            alt.Tooltip("amount_label:N", title="Amount"),
            alt.Tooltip("case_count:Q", title="Cases"),
        ],
    ).properties(height=height)


__all__ = [
    "HELD_LABEL",
    "DISTRIBUTED_LABEL",
    "format_gbp",
    "prepare_case_type_chart_data",
    "build_case_type_chart",
]
