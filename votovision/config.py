"""Constantes du tableau de bord — VotoVisión Antioquia.

Contenu :
  - Table de coordonnées (comunas de Medellín + municipios de l'Aburrá)
  - Paramètres du jitter déterministe
  - Seuils de densité pour la carte
  - Réglages de l'assistant IA (Gemini)
"""

from __future__ import annotations

import os
from typing import Dict, Optional, Tuple


# ---------------------------------------------------------------------------
# Table de coordonnées
#
# Centroïdes approximatifs, clé = nom exact tel qu'il apparaît dans l'export
# de la Registraduría (sensible à la casse). Les comunas sont cherchées en
# premier, puis le municipio.
# ---------------------------------------------------------------------------

LOCATION_COORDINATES: Dict[str, Dict[str, float]] = {
    # Medellín — 16 comunas
    "COMUNA 1":  {"lat": 6.2930, "lng": -75.5470},   # Popular
    "COMUNA 2":  {"lat": 6.2900, "lng": -75.5580},   # Santa Cruz
    "COMUNA 3":  {"lat": 6.2720, "lng": -75.5500},   # Manrique
    "COMUNA 4":  {"lat": 6.2750, "lng": -75.5680},   # Aranjuez
    "COMUNA 5":  {"lat": 6.2920, "lng": -75.5760},   # Castilla
    "COMUNA 6":  {"lat": 6.2960, "lng": -75.5880},   # Doce de Octubre
    "COMUNA 7":  {"lat": 6.2740, "lng": -75.5950},   # Robledo
    "COMUNA 8":  {"lat": 6.2420, "lng": -75.5500},   # Villa Hermosa
    "COMUNA 9":  {"lat": 6.2330, "lng": -75.5590},   # Buenos Aires
    "COMUNA 10": {"lat": 6.2480, "lng": -75.5700},   # La Candelaria
    "COMUNA 11": {"lat": 6.2530, "lng": -75.5900},   # Laureles-Estadio
    "COMUNA 12": {"lat": 6.2560, "lng": -75.6060},   # La América
    "COMUNA 13": {"lat": 6.2540, "lng": -75.6200},   # San Javier
    "COMUNA 14": {"lat": 6.2090, "lng": -75.5680},   # El Poblado
    "COMUNA 15": {"lat": 6.2170, "lng": -75.5890},   # Guayabal
    "COMUNA 16": {"lat": 6.2330, "lng": -75.6000},   # Belén
    # Corregimientos
    "SAN SEBASTIAN DE PALMITAS": {"lat": 6.3430, "lng": -75.6900},
    "SAN CRISTOBAL":             {"lat": 6.2800, "lng": -75.6350},
    "ALTAVISTA":                 {"lat": 6.2230, "lng": -75.6300},
    "SAN ANTONIO DE PRADO":      {"lat": 6.1850, "lng": -75.6550},
    "SANTA ELENA":               {"lat": 6.2100, "lng": -75.5000},
    # Municipios
    "MEDELLIN":     {"lat": 6.2442, "lng": -75.5812},
    "BELLO":        {"lat": 6.3373, "lng": -75.5580},
    "ITAGUI":       {"lat": 6.1846, "lng": -75.5991},
    "ENVIGADO":     {"lat": 6.1759, "lng": -75.5917},
    "SABANETA":     {"lat": 6.1515, "lng": -75.6166},
    "LA ESTRELLA":  {"lat": 6.1576, "lng": -75.6431},
    "CALDAS":       {"lat": 6.0911, "lng": -75.6357},
    "COPACABANA":   {"lat": 6.3463, "lng": -75.5089},
    "GIRARDOTA":    {"lat": 6.3772, "lng": -75.4455},
    "BARBOSA":      {"lat": 6.4389, "lng": -75.3331},
    "RIONEGRO":     {"lat": 6.1551, "lng": -75.3737},
}


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

# Nombre minimal de colonnes pour qu'une ligne soit retenue
MIN_FIELDS = 17
FIELD_DELIMITER = ","
FIELD_QUOTE = '"'


# ---------------------------------------------------------------------------
# Jitter déterministe
# ---------------------------------------------------------------------------

JITTER_SPAN = 0.015          # degrés, soit environ ±0.75 km autour du centroïde
JITTER_RESOLUTION = 10_000   # abs(hash) mod 10000 / 10000
JITTER_LAT_SUFFIX = "lat"
JITTER_LNG_SUFFIX = "lng"


# ---------------------------------------------------------------------------
# Carte
# ---------------------------------------------------------------------------

MAP_CENTER: Tuple[float, float] = (6.2442, -75.5812)  # centre de Medellín
MAP_ZOOM = 12
MAP_TILES = "cartodbpositron"

# Seuils stricts (votes > seuil), du plus dense au moins dense
DENSITY_THRESHOLDS: Tuple[int, ...] = (300, 150, 80, 40)
DENSITY_RADII: Tuple[int, ...] = (12, 10, 8, 6, 4)
DENSITY_COLORS: Tuple[str, ...] = ("#7f0000", "#b30000", "#d7301f", "#fc8d59", "#fdcc8a")

POPUP_TOP_CANDIDATES = 3


# ---------------------------------------------------------------------------
# Assistant IA
# ---------------------------------------------------------------------------

DEFAULT_MODEL = "gemini-2.5-flash"
SUMMARY_MAX_ZONES = 20
SUMMARY_TOP_PLACES = 10

API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY")
MODEL_ENV_VAR = "VOTOVISION_MODEL"


def get_api_key() -> Optional[str]:
    """Retourne la clé API Gemini depuis l'environnement (ou None)."""
    for var in API_KEY_ENV_VARS:
        value = os.environ.get(var)
        if value:
            return value
    return None


def get_model_name() -> str:
    """Modèle Gemini à utiliser, surchargeable via VOTOVISION_MODEL."""
    return os.environ.get(MODEL_ENV_VAR) or DEFAULT_MODEL


def base_coordinate(
    commune: str,
    municipality: str,
    coordinates: Optional[Dict[str, Dict[str, float]]] = None,
) -> Optional[Tuple[float, float]]:
    """Résout le centroïde d'un registre : comuna d'abord, puis municipio.

    Args:
        commune: nom de la comuna.
        municipality: nom du municipio.
        coordinates: table alternative (par défaut LOCATION_COORDINATES).

    Returns:
        (lat, lng) ou None si aucun des deux noms n'est connu.
    """
    table = LOCATION_COORDINATES if coordinates is None else coordinates
    coords = table.get(commune) or table.get(municipality)
    if not coords:
        return None
    return coords["lat"], coords["lng"]
