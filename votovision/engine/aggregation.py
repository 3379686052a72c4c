"""Agrégation des registres par puesto de votación.

Règles :
  - Zone parente = comuna, ou municipio si la comuna est vide
  - Centroïde = table[comuna], sinon table[municipio], sinon registre ignoré
  - Un puesto = une clé "puesto-zone parente" ; la coordonnée est le
    centroïde décalé par le jitter déterministe de la clé
  - Les voix s'additionnent au total et au compteur du candidat
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

import pandas as pd

from votovision.config import base_coordinate
from votovision.data.schemas import LocationData, LocationType, VoteRecord
from votovision.engine.jitter import jitter_coordinate


def location_key(polling_place: str, parent_zone: str) -> str:
    """Clé composite d'un puesto."""
    return f"{polling_place}-{parent_zone}"


def aggregate_by_location(
    records: Iterable[VoteRecord],
    coordinates: Optional[Dict[str, Dict[str, float]]] = None,
) -> List[LocationData]:
    """Regroupe les registres par puesto.

    Fonction pure : deux appels sur la même entrée donnent le même résultat.

    Args:
        records: registres issus du parser.
        coordinates: table de coordonnées (par défaut LOCATION_COORDINATES).

    Returns:
        Liste de LocationData dans l'ordre de première apparition.
    """
    by_key: Dict[str, LocationData] = {}

    for record in records:
        parent_zone = record.parent_zone
        base = base_coordinate(record.commune_name, record.municipality_name, coordinates)
        if base is None:
            continue

        key = location_key(record.polling_place_name, parent_zone)
        entry = by_key.get(key)
        if entry is None:
            lat, lng = jitter_coordinate(key, *base)
            entry = LocationData(
                name=record.polling_place_name,
                location_type=LocationType.PUESTO,
                parent_location=parent_zone,
                lat=lat,
                lng=lng,
            )
            by_key[key] = entry

        entry.add_votes(record.candidate_name, record.votes)

    return list(by_key.values())


# ---------------------------------------------------------------------------
# Export tabulaire
# ---------------------------------------------------------------------------

def records_to_frame(records: List[VoteRecord]) -> pd.DataFrame:
    """DataFrame des registres bruts (une colonne par attribut)."""
    columns = list(VoteRecord.model_fields)
    return pd.DataFrame([r.model_dump() for r in records], columns=columns)


def locations_to_frame(locations: List[LocationData]) -> pd.DataFrame:
    """DataFrame des puestos agrégés, trié par total décroissant.

    Colonnes : puesto, zona, lat, lng, votos, candidato_lider.
    """
    rows = []
    for loc in locations:
        leader = max(loc.candidates, key=loc.candidates.get) if loc.candidates else ""
        rows.append({
            "puesto": loc.name,
            "zona": loc.parent_location,
            "lat": loc.lat,
            "lng": loc.lng,
            "votos": loc.total_votes,
            "candidato_lider": leader,
        })
    df = pd.DataFrame(rows, columns=["puesto", "zona", "lat", "lng", "votos", "candidato_lider"])
    return df.sort_values("votos", ascending=False, kind="stable").reset_index(drop=True)
