"""Bonding coverage chart for the Streamlit UI.

Pure transformation from case aggregates to a chart model, then a Plotly
figure built from that model. No IO here.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING

from src.domain.models import CaseAggregate

if TYPE_CHECKING:  # pragma: no cover
    import plotly.graph_objects as go


UNDERBONDED_COLOR = "#e76f51"
COVERED_COLOR = "#2e7d32"
BOND_COLOR = "#457b9d"


@dataclass(frozen=True)
class BondingChartModel:
    """Bars to draw for each case, largest realisations first."""

    labels: list[str]
    bonded: list[Decimal]
    realisations: list[Decimal]
    colors: list[str]


def build_bonding_chart_model(
    aggregates: Iterable[CaseAggregate],
    max_cases: int = 15,
) -> BondingChartModel:
    """Return the chart model for the cases with the most realisations.

    Args:
        aggregates: Cases shown in the bonding table.
        max_cases: Maximum number of cases to chart.

    Returns:
        BondingChartModel: Labels, amounts and bar colors.
    """
    ranked = sorted(
        aggregates,
        key=lambda item: item.asset_realisations,
        reverse=True,
    )[:max_cases]
    return BondingChartModel(
        labels=[
            item.case.case_reference or item.case.company_name or item.case.id
            for item in ranked
        ],
        bonded=[item.bonded_amount for item in ranked],
        realisations=[item.asset_realisations for item in ranked],
        colors=[
            UNDERBONDED_COLOR if item.is_underbonded else COVERED_COLOR
            for item in ranked
        ],
    )


def build_plotly_figure(model: BondingChartModel) -> "go.Figure":
    """Build a Plotly bar figure comparing bond and realisations.

    Args:
        model: Precomputed chart model.

    Returns:
        Plotly figure ready to be displayed in Streamlit.
    """
    import plotly.graph_objects as go

    fig = go.Figure(
        data=[
            go.Bar(
                name="Bonded amount",
                x=model.labels,
                y=[float(value) for value in model.bonded],
                marker=dict(color=BOND_COLOR),
            ),
            go.Bar(
                name="Asset realisations",
                x=model.labels,
                y=[float(value) for value in model.realisations],
                marker=dict(color=model.colors),
            ),
        ]
    )
    fig.update_layout(
        barmode="group",
        margin=dict(l=8, r=8, t=8, b=8),
        height=380,
        legend=dict(orientation="h"),
        yaxis=dict(title="£"),
    )
    return fig


__all__ = [
    "BondingChartModel",
    "build_bonding_chart_model",
    "build_plotly_figure",
]
