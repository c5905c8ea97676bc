"""
src/callbacks/navigation.py
─────────────────────────────
Page routing, navbar collapse and tick indicator.
"""
from __future__ import annotations

from dash import Input, Output, State

from src.data.store import FleetStore


def register(app, store: FleetStore) -> None:
    """Register routing + navbar callbacks."""

    from src.pages import alerts, live, machines

    # ── Page routing ──────────────────────────────────────────────────────────
    @app.callback(
        Output("page-content", "children"),
        Input("url", "pathname"),
        State("store-machine", "data"),
    )
    def display_page(pathname: str, selected: str):
        fleet = store.get_live_machines()
        routes = {
            "/": live.layout,
            "/alerts": lambda: alerts.layout(fleet),
            "/machines": lambda: machines.layout(fleet, selected or fleet[0].id),
        }
        return routes.get(pathname, live.layout)()

    # ── Navbar collapse ───────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-collapse", "is_open"),
        Input("navbar-toggler", "n_clicks"),
        State("navbar-collapse", "is_open"),
        prevent_initial_call=True,
    )
    def toggle_navbar(n_clicks: int, is_open: bool) -> bool:
        return not is_open

    # ── Tick indicator ────────────────────────────────────────────────────────
    @app.callback(
        Output("navbar-tick", "children"),
        Input("interval-live", "n_intervals"),
    )
    def update_tick(n_intervals: int) -> str:
        snap = store.snapshot()
        if snap.timestamp is None:
            return "waiting for first tick"
        return f"tick {snap.tick} · {snap.timestamp:%H:%M:%S} UTC"
