"""Anzeige-Modul: Terminal-Darstellung mit Rich."""

from display.renderer import (
    highlighted_indices,
    phase_message,
    progress_text,
    render_dashboard,
    render_week_table,
    status_text,
)

__all__ = [
    "highlighted_indices",
    "phase_message",
    "progress_text",
    "render_dashboard",
    "render_week_table",
    "status_text",
]
