"""
src/layout/sidebar.py
──────────────────────
Machine selector sidebar (shown on /machines page).
"""
import dash_bootstrap_components as dbc
from dash import html

from config.alerts import STATE_COLORS
from src.data.models import Machine

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def _option(machine: Machine) -> dict:
    state = machine.operational_state.value
    dot = html.Span("●", title=state, style={"color": STATE_COLORS.get(state, MUTED), "marginRight": "6px"})
    return {
        "label": html.Div(
            [
                html.Div([dot, html.Span(machine.name, style={"fontWeight": "600", "fontSize": ".85rem"})]),
                html.Div(f"{machine.id} · {machine.type}", style={"fontSize": ".66rem", "color": MUTED}),
            ]
        ),
        "value": machine.id,
    }


def create_sidebar(machines: list[Machine], selected: str) -> html.Div:
    """Machine selector in catalog order; the dot shows operational state at page load."""
    return html.Div(
        [
            html.Div(
                f"Machines ({len(machines)})",
                style={"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase",
                       "letterSpacing": ".08em", "marginBottom": "8px"},
            ),
            dbc.RadioItems(
                id="machine-selector",
                options=[_option(m) for m in machines],
                value=selected,
                inputStyle={"marginRight": "8px"},
                labelStyle={"cursor": "pointer", "marginBottom": "6px"},
                style={"display": "flex", "flexDirection": "column", "gap": "2px"},
            ),
        ],
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {BORDER}",
            "borderRadius": "8px",
            "padding": "14px",
            "maxHeight": "70vh",
            "overflowY": "auto",
        },
    )
