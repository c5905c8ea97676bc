"""
src/layout/components/alert_badge.py
──────────────────────────────────────
Severity and operational-state badges.
"""

from dash import html

from config.alerts import SEVERITY_COLORS, STATE_COLORS

MUTED = "#8b949e"


def _badge(label: str, color: str) -> html.Span:
    return html.Span(
        label,
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 7px",
            "whiteSpace": "nowrap",
        },
    )


def severity_badge(severity: str) -> html.Span:
    """Inline Warning / Critical badge with color-coded border."""
    return _badge(severity, SEVERITY_COLORS.get(severity, MUTED))


def state_badge(state: str) -> html.Span:
    return _badge(state, STATE_COLORS.get(state, MUTED))
