"""
src/pages/live.py
──────────────────
Live status page: fleet KPIs, machine cards and the anomaly feed.

Static structure; live data injected via callbacks.
"""

import dash_bootstrap_components as dbc
from dash import html


def layout() -> html.Div:
    return html.Div(
        [
            # ── Page header ───────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("Live Machine Status", className="page-title"),
                    html.P(
                        "Simulated foundry telemetry · moulding pressure, sand temperature, cycle time variance",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            # ── Fleet KPI banner (dynamic) ────────────────────────────────────
            html.Div(id="live-kpi-banner", className="mb-4"),
            dbc.Row(
                [
                    # ── Machine cards (dynamic) ───────────────────────────────
                    dbc.Col(
                        [
                            dbc.Checklist(
                                id="live-running-only",
                                options=[{"label": "Running machines only", "value": "running"}],
                                value=["running"],
                                switch=True,
                                style={"fontSize": ".8rem", "marginBottom": "10px"},
                            ),
                            html.Div(id="live-machine-cards"),
                        ],
                        lg=8,
                    ),
                    # ── Anomaly feed (dynamic) ────────────────────────────────
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Anomaly Feed", className="chart-title"),
                                html.Div(
                                    id="live-anomaly-feed",
                                    style={"maxHeight": "75vh", "overflowY": "auto"},
                                ),
                            ],
                            className="chart-card",
                        ),
                        lg=4,
                    ),
                ],
                className="g-3",
            ),
        ],
        style={"padding": "1.5rem"},
    )
