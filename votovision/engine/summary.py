"""Synthèses des agrégats (totaux par zone, puestos en tête)."""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple

from votovision.data.schemas import LocationData


def grand_total(locations: List[LocationData]) -> int:
    """Total général des voix sur la carte."""
    return sum(loc.total_votes for loc in locations)


def zone_totals(
    locations: List[LocationData],
    limit: Optional[int] = None,
) -> List[Tuple[str, int]]:
    """Totaux par zone parente, du plus dense au moins dense.

    Args:
        locations: puestos agrégés.
        limit: nombre max de zones (None = toutes).

    Returns:
        Liste (zone, total) ; à égalité, ordre de première apparition.
    """
    totals: Dict[str, int] = {}
    for loc in locations:
        totals[loc.parent_location] = totals.get(loc.parent_location, 0) + loc.total_votes
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return ranked if limit is None else ranked[:limit]


def top_polling_places(locations: List[LocationData], n: int = 10) -> List[LocationData]:
    """Les n puestos avec le plus de voix (la liste d'entrée n'est pas modifiée)."""
    return sorted(locations, key=lambda loc: loc.total_votes, reverse=True)[:n]


def top_candidates(location: LocationData, n: int = 3) -> List[Tuple[str, int]]:
    """Les n candidats en tête dans un puesto."""
    return sorted(location.candidates.items(), key=lambda item: item[1], reverse=True)[:n]


def candidate_totals(locations: List[LocationData]) -> List[Tuple[str, int]]:
    """Total par candidat sur l'ensemble des puestos, décroissant."""
    totals: Dict[str, int] = {}
    for loc in locations:
        for name, votes in loc.candidates.items():
            totals[name] = totals.get(name, 0) + votes
    return sorted(totals.items(), key=lambda item: item[1], reverse=True)
