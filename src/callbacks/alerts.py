"""
src/callbacks/alerts.py
────────────────────────
Anomaly ledger page callbacks.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
import pandas as pd
from dash import Input, Output, html

from config.alerts import SEVERITY_COLORS, AnomalySeverity
from src.data.store import FleetStore
from src.layout.components.alert_badge import severity_badge

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def filter_anomalies(
    df: pd.DataFrame,
    severity: str = "all",
    machine_id: str = "all",
    parameter: str = "all",
) -> pd.DataFrame:
    """Apply dropdown filters; ledger order (newest first) is kept."""
    if severity != "all":
        df = df[df["severity"] == severity]
    if machine_id != "all":
        df = df[df["machine_id"] == machine_id]
    if parameter != "all":
        df = df[df["parameter"] == parameter]
    return df


def _build_table(df: pd.DataFrame) -> html.Div:
    if df.empty:
        return html.Div(
            "No anomalies match the selected filters.",
            style={"color": MUTED, "padding": "20px", "textAlign": "center"},
        )

    rows = []
    for _, row in df.iterrows():
        rows.append(
            html.Tr(
                [
                    html.Td(
                        pd.to_datetime(row["timestamp"]).strftime("%H:%M:%S"),
                        style={"color": MUTED, "fontSize": ".78rem", "fontFamily": "monospace"},
                    ),
                    html.Td(
                        [
                            html.Div(row["machine_name"], style={"fontSize": ".82rem", "fontWeight": "600"}),
                            html.Div(row["machine_id"], style={"fontSize": ".66rem", "color": "#58a6ff"}),
                        ]
                    ),
                    html.Td(severity_badge(row["severity"])),
                    html.Td(row["parameter"], style={"fontSize": ".78rem", "color": "#c9d1d9"}),
                    html.Td(
                        f"{row['value']:.2f}",
                        style={"fontSize": ".78rem", "color": SEVERITY_COLORS.get(row["severity"], MUTED)},
                    ),
                    html.Td(row["expected"], style={"fontSize": ".78rem", "color": MUTED}),
                ],
                style={"borderBottom": f"1px solid {BORDER}"},
            )
        )

    return html.Div(
        html.Table(
            [
                html.Thead(
                    html.Tr(
                        [html.Th(h) for h in ["Time", "Machine", "Severity", "Parameter", "Value", "Expected"]],
                        style={"color": MUTED, "fontSize": ".68rem", "textTransform": "uppercase"},
                    )
                ),
                html.Tbody(rows),
            ],
            style={"width": "100%", "borderCollapse": "collapse", "fontSize": ".82rem"},
        ),
        style={"overflowX": "auto"},
    )


def _summary_badges(df: pd.DataFrame, cap: int) -> dbc.Row:
    counts = df.groupby("severity").size() if not df.empty else pd.Series(dtype=int)
    return dbc.Row(
        [
            dbc.Col(
                html.Div(
                    [
                        html.Div(str(int(counts.get(sev.value, 0))), style={"fontSize": "1.4rem", "fontWeight": "700", "color": SEVERITY_COLORS[sev]}),
                        html.Div(sev.value, style={"fontSize": ".65rem", "color": MUTED, "textTransform": "uppercase"}),
                    ],
                    style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px", "padding": "10px 16px"},
                ),
                xs=6, md=3,
            )
            for sev in (AnomalySeverity.CRITICAL, AnomalySeverity.WARNING)
        ]
        + [
            dbc.Col(
                html.Div(
                    [
                        html.Div(f"{len(df)} / {cap}", style={"fontSize": "1.4rem", "fontWeight": "700", "color": "#58a6ff"}),
                        html.Div("Ledger size", style={"fontSize": ".65rem", "color": MUTED, "textTransform": "uppercase"}),
                    ],
                    style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px", "padding": "10px 16px"},
                ),
                xs=6, md=3,
            )
        ],
        className="g-2",
    )


def register(app, store: FleetStore) -> None:

    @app.callback(
        [
            Output("alerts-table", "children"),
            Output("alerts-summary-badges", "children"),
        ],
        [
            Input("interval-live", "n_intervals"),
            Input("alerts-filter-severity", "value"),
            Input("alerts-filter-machine", "value"),
            Input("alerts-filter-parameter", "value"),
        ],
    )
    def update_alerts_table(
        n_intervals: int,
        severity_filter: str,
        machine_filter: str,
        parameter_filter: str,
    ):
        full_df = store.anomalies_frame()
        df = filter_anomalies(full_df, severity_filter, machine_filter, parameter_filter)
        return _build_table(df), _summary_badges(full_df, store.ledger_cap)
