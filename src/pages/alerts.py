"""
src/pages/alerts.py
────────────────────
Anomaly ledger page with severity / machine / parameter filters.
"""

import dash_bootstrap_components as dbc
from dash import dcc, html

from config.alerts import PARAMETER_ORDER, AnomalySeverity
from src.data.models import Machine

MUTED = "#8b949e"

_LABEL_STYLE = {"fontSize": ".72rem", "color": MUTED, "textTransform": "uppercase"}


def _filter(label: str, component_id: str, options: list[dict]) -> dbc.Col:
    return dbc.Col(
        [
            html.Label(label, style=_LABEL_STYLE),
            dcc.Dropdown(
                id=component_id,
                options=[{"label": "All", "value": "all"}] + options,
                value="all",
                clearable=False,
                style={"fontSize": ".85rem"},
                className="dark-dropdown",
            ),
        ],
        md=3,
    )


def layout(machines: list[Machine]) -> html.Div:
    severity_options = [{"label": s.value, "value": s.value} for s in AnomalySeverity]
    machine_options = [{"label": f"{m.name} ({m.id})", "value": m.id} for m in machines]
    parameter_options = [{"label": p.value, "value": p.value} for p in PARAMETER_ORDER]

    return html.Div(
        [
            html.Div(
                [
                    html.H2("Anomaly Ledger", className="page-title"),
                    html.P(
                        "Most recent threshold breaches across the fleet, newest first",
                        className="page-subtitle",
                    ),
                ],
                className="page-header",
            ),
            # ── Summary badges ─────────────────────────────────────────────────
            html.Div(id="alerts-summary-badges", className="mb-3"),
            # ── Filter row ─────────────────────────────────────────────────────
            dbc.Row(
                [
                    _filter("Severity", "alerts-filter-severity", severity_options),
                    _filter("Machine", "alerts-filter-machine", machine_options),
                    _filter("Parameter", "alerts-filter-parameter", parameter_options),
                ],
                className="g-3 mb-3",
            ),
            # ── Ledger table ───────────────────────────────────────────────────
            html.Div(
                html.Div(id="alerts-table"),
                className="chart-card",
            ),
        ],
        style={"padding": "1.5rem"},
    )
