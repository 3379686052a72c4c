"""Carte Folium — densité de voix par puesto de votación.

Un CircleMarker par puesto : rayon et couleur selon le total de voix,
infobulle = nom du puesto, popup = zone, total et 3 premiers candidats.
"""

from __future__ import annotations

from html import escape
from typing import List, Optional

import folium

from votovision.config import (
    DENSITY_COLORS,
    DENSITY_RADII,
    DENSITY_THRESHOLDS,
    MAP_CENTER,
    MAP_TILES,
    MAP_ZOOM,
    POPUP_TOP_CANDIDATES,
)
from votovision.data.schemas import GroundingChunk, LocationData
from votovision.engine.summary import top_candidates


def _density_level(votes: int) -> int:
    for level, threshold in enumerate(DENSITY_THRESHOLDS):
        if votes > threshold:
            return level
    return len(DENSITY_THRESHOLDS)


def marker_radius(votes: int) -> int:
    """Rayon du marqueur (px)."""
    return DENSITY_RADII[_density_level(votes)]


def marker_color(votes: int) -> str:
    """Couleur du marqueur, du rouge foncé (dense) au beige."""
    return DENSITY_COLORS[_density_level(votes)]


def popup_html(loc: LocationData) -> str:
    rows = "".join(
        f'<tr><td>{escape(name)}</td><td style="text-align:right;"><b>{count}</b></td></tr>'
        for name, count in top_candidates(loc, POPUP_TOP_CANDIDATES)
    )
    return (
        '<div style="min-width:200px;">'
        f'<div style="font-size:10px; color:#64748b; text-transform:uppercase;">{escape(loc.parent_location)}</div>'
        f"<b>{escape(loc.name)}</b><br>"
        f"Votos en Puesto : {loc.total_votes}"
        f'<table style="width:100%; font-size:11px;">{rows}</table>'
        "</div>"
    )


def build_vote_map(locations: List[LocationData]) -> folium.Map:
    """Carte des puestos agrégés.

    Args:
        locations: sortie de aggregate_by_location.

    Returns:
        Carte Folium centrée sur Medellín.
    """
    m = folium.Map(location=list(MAP_CENTER), zoom_start=MAP_ZOOM, tiles=MAP_TILES)

    for loc in locations:
        color = marker_color(loc.total_votes)
        folium.CircleMarker(
            location=[loc.lat, loc.lng],
            radius=marker_radius(loc.total_votes),
            color=color,
            weight=1,
            fill=True,
            fill_color=color,
            fill_opacity=0.7,
            tooltip=folium.Tooltip(escape(loc.name), direction="top"),
            popup=folium.Popup(popup_html(loc), max_width=300),
        ).add_to(m)

    return m


def grounding_link_html(chunk: GroundingChunk) -> Optional[str]:
    """Lien Google Maps d'une référence de l'assistant (None sans source Maps)."""
    if not chunk.maps or not chunk.maps.uri:
        return None
    uri = escape(chunk.maps.uri, quote=True)
    label = escape(chunk.maps.title or chunk.maps.uri)
    return (
        f'<a class="grounding-link" href="{uri}" target="_blank" rel="noopener noreferrer">'
        f"📍 {label} · Abrir en Google Maps</a>"
    )
