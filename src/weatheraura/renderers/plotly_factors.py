"""Plotly bar chart explaining which factors drive the severity score."""

import plotly.graph_objects as go

from weatheraura.i18n import t
from weatheraura.models import SeverityResult
from weatheraura.severity import contributions

_BG = "#0d1b35"
_BAR_COLOR = "#c9a96e"
_TEXT_COLOR = "#e8d5a3"


def render_factor_chart(result: SeverityResult, lang: str = "en") -> go.Figure:
    """Horizontal bar chart of factor contributions, largest on top.

    Only factors contributing more than 0.01 are drawn; an all-calm reading
    yields an empty chart with the title only.

    Args:
        result: Severity scoring result.
        lang: Language code ('ko' or 'en') for labels.

    Returns:
        Plotly Figure object.
    """
    ranked = contributions(result)
    # plotly draws the first category at the bottom
    ordered = list(reversed(ranked))

    bar = go.Bar(
        x=[c.contribution for c in ordered],
        y=[t(f"factor_{c.name}", lang) for c in ordered],
        orientation="h",
        marker=dict(color=_BAR_COLOR, line=dict(width=0)),
        text=[f"{c.share:.0%}" for c in ordered],
        textposition="outside",
        hovertemplate="%{y}: %{x:.3f}<extra></extra>",
        name="factors",
    )

    fig = go.Figure(data=[bar])
    fig.update_layout(
        title=dict(
            text=f"{t('factor_chart_title', lang)} · {result.score:.2f}",
            font=dict(color=_TEXT_COLOR),
        ),
        paper_bgcolor=_BG,
        plot_bgcolor=_BG,
        showlegend=False,
        margin=dict(l=0, r=40, t=40, b=0),
        height=220,
        font=dict(color=_TEXT_COLOR),
        xaxis=dict(
            visible=False,
            range=[0, max([c.contribution for c in ranked], default=0.0) * 1.3 or 1.0],
            fixedrange=True,
        ),
        yaxis=dict(fixedrange=True),
    )
    return fig
