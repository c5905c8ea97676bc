"""
src/layout/navbar.py
─────────────────────
Navigation bar with page links and the engine tick indicator.
"""

import dash_bootstrap_components as dbc
from dash import html

NAV_BG = "#0d1117"
BORDER = "#30363d"
ACCENT = "#58a6ff"

# (label, href, link id)
NAV_PAGES = [
    ("Live Status", "/", "nav-live"),
    ("Anomalies", "/alerts", "nav-alerts"),
    ("Machines", "/machines", "nav-machines"),
]


def _tick_indicator() -> dbc.NavItem:
    return dbc.NavItem(
        html.Span(
            id="navbar-tick",
            children="waiting for first tick",
            style={"fontSize": ".72rem", "color": "#8b949e", "marginLeft": "12px", "fontFamily": "monospace"},
        )
    )


def create_navbar() -> dbc.Navbar:
    links = [
        dbc.NavItem(dbc.NavLink(label, href=href, id=link_id, active="exact"))
        for label, href, link_id in NAV_PAGES
    ]
    brand = dbc.NavbarBrand(
        [
            html.Span("⚙", style={"marginRight": "8px", "fontSize": "1.1rem"}),
            html.Span("Foundry Live", style={"fontWeight": "700", "letterSpacing": ".04em"}),
            html.Span(" telemetry", style={"fontWeight": "400", "color": "#8b949e", "fontSize": ".8rem"}),
        ],
        href="/",
        style={"color": ACCENT, "textDecoration": "none"},
    )

    return dbc.Navbar(
        dbc.Container(
            [
                brand,
                dbc.NavbarToggler(id="navbar-toggler", n_clicks=0),
                dbc.Collapse(
                    dbc.Nav(
                        links + [_tick_indicator()],
                        className="ms-auto",
                        navbar=True,
                        style={"alignItems": "center"},
                    ),
                    id="navbar-collapse",
                    navbar=True,
                    is_open=False,
                ),
            ],
            fluid=True,
        ),
        color=NAV_BG,
        dark=True,
        sticky="top",
        style={"borderBottom": f"1px solid {BORDER}", "padding": ".5rem 1rem"},
    )
