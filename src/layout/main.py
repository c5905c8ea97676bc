"""
src/layout/main.py
───────────────────
Root application layout.

The page container is filled by the routing callback; every page polls
the engine through the shared `interval-live` component, and the selected
machine is kept client-side in `store-machine`.
"""
from dash import dcc, html

from config.settings import settings
from src.layout.navbar import create_navbar

MUTED = "#8b949e"
BORDER = "#30363d"


def _footer() -> html.Footer:
    parts = [
        "Foundry Live Telemetry",
        f"engine tick {settings.TICK_INTERVAL_MS / 1000:g} s",
        f"ledger keeps {settings.LEDGER_CAP} anomalies",
        "simulated sensors",
    ]
    return html.Footer(
        " · ".join(parts),
        style={
            "textAlign": "center",
            "padding": ".7rem",
            "fontSize": ".72rem",
            "color": MUTED,
            "borderTop": f"1px solid {BORDER}",
            "marginTop": "2rem",
        },
    )


def create_layout(default_machine: str) -> html.Div:
    """Assemble the root layout with `default_machine` preselected on /machines."""
    return html.Div(
        [
            dcc.Store(id="store-machine", data=default_machine),
            dcc.Location(id="url", refresh=False),
            dcc.Interval(id="interval-live", interval=settings.UI_REFRESH_MS, n_intervals=0),

            create_navbar(),
            html.Div(id="page-content", style={"minHeight": "calc(100vh - 60px)"}),
            _footer(),
        ],
        style={"backgroundColor": "#0d1117", "minHeight": "100vh", "color": "#c9d1d9"},
    )
