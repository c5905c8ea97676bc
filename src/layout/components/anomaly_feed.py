"""
src/layout/components/anomaly_feed.py
──────────────────────────────────────
Anomaly feed rendering (newest first).
"""
from __future__ import annotations

from collections.abc import Sequence

from dash import html

from config.alerts import SEVERITY_BG, SEVERITY_COLORS
from src.data.models import AnomalyRecord

MUTED = "#8b949e"


def anomaly_item(record: AnomalyRecord) -> html.Div:
    color = SEVERITY_COLORS.get(record.severity, MUTED)
    return html.Div(
        [
            html.Div(
                [
                    html.Span(record.machine_name, style={"fontWeight": "700", "fontSize": ".82rem"}),
                    html.Span(
                        record.timestamp.strftime("%H:%M:%S"),
                        style={"fontSize": ".68rem", "color": MUTED, "fontFamily": "monospace"},
                    ),
                ],
                style={"display": "flex", "justifyContent": "space-between"},
            ),
            html.Div(
                [
                    f"{record.parameter}: ",
                    html.Span(f"{record.value:.1f}", style={"fontWeight": "700", "color": color}),
                ],
                style={"fontSize": ".78rem"},
            ),
            html.Div(f"Expected: {record.expected}", style={"fontSize": ".68rem", "color": MUTED}),
        ],
        style={
            "borderLeft": f"4px solid {color}",
            "backgroundColor": SEVERITY_BG.get(record.severity, "transparent"),
            "borderRadius": "6px",
            "padding": "8px 10px",
            "marginBottom": "8px",
        },
    )


def anomaly_feed(records: Sequence[AnomalyRecord], empty_text: str = "No anomalies recorded.") -> html.Div:
    if not records:
        return html.Div(empty_text, style={"color": MUTED, "padding": "12px"})
    return html.Div([anomaly_item(r) for r in records])
