"""Graphiques Plotly.

Visualisations :
  - Barres horizontales : voix par zone
  - Barres : voix par candidat
"""

from __future__ import annotations

from typing import List

import plotly.graph_objects as go

from votovision.config import DENSITY_COLORS
from votovision.data.schemas import LocationData
from votovision.engine.summary import candidate_totals, zone_totals


def bar_zone_totals(
    locations: List[LocationData],
    limit: int = 20,
    title: str = "Votos por zona",
) -> go.Figure:
    """Voix par zone parente, la plus dense en haut.

    Args:
        locations: puestos agrégés.
        limit: nombre max de zones affichées.
        title: titre du graphique.

    Returns:
        Figure Plotly.
    """
    ranked = zone_totals(locations, limit=limit)
    # Plotly trace les barres horizontales de bas en haut
    ranked = list(reversed(ranked))

    fig = go.Figure(go.Bar(
        x=[total for _, total in ranked],
        y=[zone for zone, _ in ranked],
        orientation="h",
        marker_color=DENSITY_COLORS[1],
    ))
    fig.update_layout(
        title=title,
        xaxis_title="Votos",
        template="plotly_white",
        height=max(300, 28 * len(ranked)),
    )
    return fig


def bar_candidate_totals(
    locations: List[LocationData],
    limit: int = 10,
    title: str = "Votos por candidato",
) -> go.Figure:
    """Voix totales des candidats en tête."""
    ranked = candidate_totals(locations)[:limit]

    fig = go.Figure(go.Bar(
        x=[name for name, _ in ranked],
        y=[votes for _, votes in ranked],
        marker_color=DENSITY_COLORS[2],
        text=[votes for _, votes in ranked],
        textposition="outside",
    ))
    fig.update_layout(
        title=title,
        yaxis_title="Votos",
        template="plotly_white",
    )
    return fig
