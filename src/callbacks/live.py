"""
src/callbacks/live.py
──────────────────────
Live status page callbacks: KPI banner, machine cards, anomaly feed.
All three outputs are built from one snapshot so they agree on the tick.
"""
from __future__ import annotations

import dash_bootstrap_components as dbc
from dash import Input, Output, html

from config.alerts import PARAMETER_UNITS, STATE_COLORS, AnomalySeverity, MonitoredParameter
from src.analytics.thresholds import get_value_color
from src.data.models import Machine, OperationalState
from src.data.store import FleetStore
from src.layout.components.alert_badge import state_badge
from src.layout.components.anomaly_feed import anomaly_feed
from src.layout.components.kpi_card import kpi_card, readout
from src.layout.components.parameter_gauge import parameter_gauge

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def _machine_card(machine: Machine) -> html.Div:
    env = machine.envelope
    sample = machine.live_sample
    variance_band = env.cycle_time_variance_pct
    variance_color = get_value_color(sample.cycle_time_variance_pct, variance_band)
    variance_text = "n/a" if variance_band.is_zero else f"{sample.cycle_time_variance_pct:.1f}%"
    state = machine.operational_state.value

    return html.Div(
        [
            html.Div(
                [
                    html.Div(
                        [
                            html.Div(machine.name, style={"fontWeight": "700", "fontSize": ".92rem"}),
                            html.Div(f"{machine.id} · {machine.location}", style={"fontSize": ".66rem", "color": MUTED}),
                        ]
                    ),
                    state_badge(state),
                ],
                style={"display": "flex", "justifyContent": "space-between", "alignItems": "flex-start"},
            ),
            dbc.Row(
                [
                    dbc.Col(parameter_gauge(
                        sample.moulding_pressure, env.moulding_pressure, "Mould Pressure",
                        PARAMETER_UNITS[MonitoredParameter.MOULDING_PRESSURE],
                    ), xs=6),
                    dbc.Col(parameter_gauge(
                        sample.sand_temperature, env.sand_temperature, "Sand Temp",
                        PARAMETER_UNITS[MonitoredParameter.SAND_TEMPERATURE],
                    ), xs=6),
                ],
                className="g-1",
            ),
            html.Div(readout("Cycle Time Variance", variance_text, variance_color), style={"textAlign": "center"}),
        ],
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {BORDER}",
            "borderLeft": f"4px solid {STATE_COLORS.get(state, BORDER)}",
            "borderRadius": "8px",
            "padding": "12px",
        },
    )


def register(app, store: FleetStore) -> None:

    @app.callback(
        [
            Output("live-kpi-banner", "children"),
            Output("live-machine-cards", "children"),
            Output("live-anomaly-feed", "children"),
        ],
        [
            Input("interval-live", "n_intervals"),
            Input("live-running-only", "value"),
        ],
    )
    def update_live(n_intervals: int, running_only: list[str]):
        snap = store.snapshot()
        machines = list(snap.machines)

        counts = {state: 0 for state in OperationalState}
        for m in machines:
            counts[m.operational_state] += 1
        critical = sum(1 for a in snap.anomalies if a.severity == AnomalySeverity.CRITICAL)
        warning = len(snap.anomalies) - critical

        kpi_banner = dbc.Row(
            [
                dbc.Col(kpi_card("Running", str(counts[OperationalState.RUNNING]), STATE_COLORS["Running"],
                                 sub_label=f"of {len(machines)} machines"), xs=6, md=3),
                dbc.Col(kpi_card("Idle / Down",
                                 f"{counts[OperationalState.IDLE]} / {counts[OperationalState.DOWN]}",
                                 STATE_COLORS["Idle"]), xs=6, md=3),
                dbc.Col(kpi_card("Warnings", str(warning), "#e8a020" if warning else "#2ea44f",
                                 sub_label="in anomaly feed"), xs=6, md=3),
                dbc.Col(kpi_card("Critical", str(critical), "#da3633" if critical else "#2ea44f",
                                 sub_label="in anomaly feed",
                                 border_color="#da3633" if critical else BORDER), xs=6, md=3),
            ],
            className="g-3",
        )

        if running_only:
            machines = [m for m in machines if m.is_running]
        cards = dbc.Row([dbc.Col(_machine_card(m), md=6) for m in machines], className="g-3")

        return kpi_banner, cards, anomaly_feed(snap.anomalies)
