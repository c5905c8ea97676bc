"""
src/layout/components/parameter_gauge.py
─────────────────────────────────────────
Envelope-banded gauge for one live parameter, using a Plotly indicator.
"""
from __future__ import annotations

import plotly.graph_objects as go
from dash import dcc, html

from src.analytics.thresholds import STATUS_COLORS, get_value_color
from src.data.models import ParameterEnvelope

CARD_BG = "#161b22"
MUTED = "#8b949e"


def _axis_max(band: ParameterEnvelope) -> float:
    return band.critical_max * 1.1 if band.critical_max > 0 else 1.0


def parameter_gauge(
    value: float,
    band: ParameterEnvelope,
    label: str,
    unit: str,
    height: int = 150,
) -> dcc.Graph | html.Div:
    """
    Plotly gauge with nominal / warning / critical bands from the envelope.

    Args:
        value: Current live reading
        band: Envelope for this parameter
        label: Title shown above the gauge
        unit: Suffix for the number
        height: Figure height in px
    """
    if band.is_zero:
        return html.Div(
            [
                html.Div(label, style={"fontSize": ".72rem", "color": MUTED}),
                html.Div("Not monitored", style={"fontSize": ".78rem", "color": STATUS_COLORS["off"], "marginTop": "6px"}),
            ],
            style={"height": f"{height}px", "textAlign": "center", "paddingTop": "24px"},
        )

    color = get_value_color(value, band)
    axis_max = _axis_max(band)

    fig = go.Figure(go.Indicator(
        mode="gauge+number",
        value=value,
        number={"suffix": f" {unit}", "font": {"color": color, "size": 20}, "valueformat": ".1f"},
        title={"text": label, "font": {"color": MUTED, "size": 11}},
        gauge={
            "axis": {
                "range": [0, axis_max],
                "tickwidth": 1,
                "tickcolor": "#30363d",
                "tickfont": {"color": MUTED, "size": 8},
            },
            "bar": {"color": color, "thickness": 0.25},
            "bgcolor": "rgba(0,0,0,0)",
            "borderwidth": 0,
            "steps": [
                {"range": [0, band.min], "color": "rgba(232,160,32,0.10)"},
                {"range": [band.min, band.max], "color": "rgba(46,164,79,0.10)"},
                {"range": [band.max, band.critical_max], "color": "rgba(232,160,32,0.12)"},
                {"range": [band.critical_max, axis_max], "color": "rgba(218,54,51,0.15)"},
            ],
            "threshold": {
                "line": {"color": "#58a6ff", "width": 2},
                "thickness": 0.75,
                "value": band.ideal,
            },
        },
    ))

    fig.update_layout(
        paper_bgcolor=CARD_BG,
        plot_bgcolor=CARD_BG,
        margin=dict(l=15, r=15, t=35, b=5),
        height=height,
        font=dict(color="#c9d1d9"),
    )

    return dcc.Graph(
        figure=fig,
        config={"displayModeBar": False},
        style={"height": f"{height}px"},
    )
