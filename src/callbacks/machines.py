"""
src/callbacks/machines.py
──────────────────────────
Machine detail page callbacks.
Updates gauges and recent anomalies for the selected machine on every
interval, and applies operator state changes to the fleet store.
"""
from __future__ import annotations

import logging

import dash_bootstrap_components as dbc
from dash import Input, Output, State, html

from config.alerts import PARAMETER_UNITS, MonitoredParameter
from src.analytics.thresholds import get_value_color
from src.data.store import FleetStore
from src.layout.components.alert_badge import state_badge
from src.layout.components.anomaly_feed import anomaly_feed
from src.layout.components.kpi_card import readout
from src.layout.components.parameter_gauge import parameter_gauge

logger = logging.getLogger(__name__)

MUTED = "#8b949e"

# Anomalies shown in the per-machine feed
RECENT_LIMIT = 10


def _header(machine) -> html.Div:
    return html.Div(
        [
            html.Div(
                [
                    html.H4(machine.name, style={"margin": 0, "fontWeight": "700"}),
                    html.Div(
                        f"{machine.id} · {machine.type} · {machine.location}",
                        style={"fontSize": ".75rem", "color": MUTED},
                    ),
                ]
            ),
            state_badge(machine.operational_state.value),
        ],
        style={"display": "flex", "justifyContent": "space-between", "alignItems": "center"},
    )


def _gauges(machine) -> dbc.Row:
    env = machine.envelope
    sample = machine.live_sample
    variance_band = env.cycle_time_variance_pct
    if variance_band.is_zero:
        variance_text, variance_expected = "n/a", "Not monitored"
    else:
        variance_text = f"{sample.cycle_time_variance_pct:.1f}%"
        variance_expected = f"max {variance_band.max:g}% · critical {variance_band.critical_max:g}%"

    return dbc.Row(
        [
            dbc.Col(parameter_gauge(
                sample.moulding_pressure, env.moulding_pressure, MonitoredParameter.MOULDING_PRESSURE.value,
                PARAMETER_UNITS[MonitoredParameter.MOULDING_PRESSURE], height=190,
            ), md=4),
            dbc.Col(parameter_gauge(
                sample.sand_temperature, env.sand_temperature, MonitoredParameter.SAND_TEMPERATURE.value,
                PARAMETER_UNITS[MonitoredParameter.SAND_TEMPERATURE], height=190,
            ), md=4),
            dbc.Col(
                [
                    readout(
                        MonitoredParameter.CYCLE_TIME_VARIANCE.value,
                        variance_text,
                        get_value_color(sample.cycle_time_variance_pct, variance_band),
                    ),
                    html.Div(variance_expected, style={"fontSize": ".68rem", "color": MUTED, "marginBottom": "10px"}),
                    readout("Ideal cycle time", f"{machine.ideal_cycle_time_s:g} s"),
                    readout("Moulds / hour", f"{machine.moulds_per_hour:g}"),
                    readout("Energy", f"{machine.energy_kwh:g} kWh"),
                ],
                md=4,
                style={"display": "flex", "flexDirection": "column", "gap": "6px", "justifyContent": "center"},
            ),
        ],
        className="g-2",
    )


def register(app, store: FleetStore) -> None:

    @app.callback(
        Output("store-machine", "data"),
        Input("machine-selector", "value"),
        prevent_initial_call=True,
    )
    def update_selected_machine(value: str) -> str:
        return value

    # Only follows the selection, so a pending choice survives interval refreshes
    @app.callback(
        Output("machine-state-select", "value"),
        Input("store-machine", "data"),
    )
    def sync_state_select(machine_id: str):
        try:
            return store.get_machine(machine_id).operational_state.value
        except KeyError:
            return None

    @app.callback(
        [
            Output("machine-header", "children"),
            Output("machine-gauges", "children"),
            Output("machine-anomalies", "children"),
        ],
        [
            Input("interval-live", "n_intervals"),
            Input("store-machine", "data"),
        ],
    )
    def update_machine_panel(n_intervals: int, machine_id: str):
        try:
            machine = store.get_machine(machine_id)
        except KeyError:
            missing = html.Div(f"Unknown machine: {machine_id}", style={"color": MUTED})
            return missing, None, None

        recent = [a for a in store.get_anomalies() if a.machine_id == machine.id][:RECENT_LIMIT]
        return (
            _header(machine),
            _gauges(machine),
            anomaly_feed(recent, empty_text="No anomalies recorded for this machine."),
        )

    @app.callback(
        Output("machine-state-feedback", "children"),
        Input("machine-state-apply", "n_clicks"),
        State("machine-state-select", "value"),
        State("store-machine", "data"),
        prevent_initial_call=True,
    )
    def apply_machine_state(n_clicks: int, state: str, machine_id: str) -> str:
        if not state:
            return "Select a status first."
        try:
            updated = store.set_operational_state(machine_id, state)
        except KeyError:
            logger.warning("State change for unknown machine %s", machine_id)
            return f"Unknown machine: {machine_id}"
        except ValueError:
            logger.warning("Rejected state %r for machine %s", state, machine_id)
            return f"Invalid status: {state}"
        return f"{updated.name} set to {updated.operational_state.value}."
