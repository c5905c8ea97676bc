"""
src/pages/machines.py
──────────────────────
Machine detail and control page.

Layout: sidebar selector + detail panel with gauges and state control.
"""
import dash_bootstrap_components as dbc
from dash import html

from src.data.models import Machine, OperationalState
from src.layout.sidebar import create_sidebar

MUTED = "#8b949e"


def layout(machines: list[Machine], selected: str) -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H2("Machine Control", className="page-title"),
                    html.P("Live readings, envelope and operational state per machine", className="page-subtitle"),
                ],
                className="page-header",
            ),

            dbc.Row(
                [
                    # ── Sidebar ───────────────────────────────────────────────
                    dbc.Col(create_sidebar(machines, selected), md=3),

                    # ── Detail panel ──────────────────────────────────────────
                    dbc.Col(
                        [
                            html.Div(id="machine-header", className="mb-3"),
                            html.Div(id="machine-gauges", className="chart-card mb-3"),
                            html.Div(
                                [
                                    html.Div("Set Machine Status", className="chart-title"),
                                    dbc.RadioItems(
                                        id="machine-state-select",
                                        options=[{"label": s.value, "value": s.value} for s in OperationalState],
                                        inline=True,
                                        className="mb-2",
                                    ),
                                    dbc.Button("Set Status", id="machine-state-apply", n_clicks=0, color="primary", size="sm"),
                                    html.Div(id="machine-state-feedback", style={"fontSize": ".75rem", "color": MUTED, "marginTop": "8px"}),
                                ],
                                className="chart-card mb-3",
                            ),
                            html.Div(
                                [
                                    html.Div("Recent anomalies for this machine", className="chart-title"),
                                    html.Div(id="machine-anomalies"),
                                ],
                                className="chart-card",
                            ),
                        ],
                        md=9,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
