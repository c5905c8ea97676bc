"""
app.py
──────
Foundry Live Telemetry: Application Entry Point.

Startup sequence:
  1. Load the machine catalog into the fleet store
  2. Start the telemetry scheduler (mutate → classify → commit every tick)
  3. Create Dash app with DARKLY bootstrap theme
  4. Register all callbacks
  5. Run dev server (or expose `server` for gunicorn in production)
"""
import logging

import dash
import dash_bootstrap_components as dbc

from config.machines import MACHINE_CATALOG
from config.settings import settings
from src.data.catalog import load_catalog
from src.data.simulator import NoiseSource
from src.data.store import FleetStore
from src.engine.scheduler import TelemetryScheduler
from src.layout.main import create_layout

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# ── 1. Fleet store ────────────────────────────────────────────────────────────
print("Loading machine catalog...")
machines = load_catalog(MACHINE_CATALOG)
store = FleetStore(machines, ledger_cap=settings.LEDGER_CAP)
print(f"{len(store)} machines loaded.")

# ── 2. Telemetry engine ───────────────────────────────────────────────────────
scheduler = TelemetryScheduler(
    store,
    noise=NoiseSource.seeded(settings.SIMULATION_SEED),
    interval_ms=settings.TICK_INTERVAL_MS,
)
scheduler.start()

# ── 3. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="Foundry Telemetry",
)

server = app.server  # gunicorn entry point
app.layout = create_layout(machines[0].id)

# ── 4. Register callbacks ─────────────────────────────────────────────────────
from src.callbacks import alerts, live, navigation
from src.callbacks import machines as machine_callbacks

navigation.register(app, store)
live.register(app, store)
alerts.register(app, store)
machine_callbacks.register(app, store)

# ── 5. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    try:
        app.run(
            debug=settings.DEBUG,
            host=settings.HOST,
            port=settings.PORT,
            use_reloader=False,
        )
    finally:
        scheduler.stop()
