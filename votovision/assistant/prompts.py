"""Consignes système et actions rapides de l'assistant « EstrategaBot »."""

from __future__ import annotations

from typing import Dict, List

from votovision.config import SUMMARY_MAX_ZONES, SUMMARY_TOP_PLACES
from votovision.data.schemas import LocationData
from votovision.engine.summary import grand_total, top_polling_places, zone_totals

WELCOME_MESSAGE = (
    "¡Hola! Soy tu estratega electoral con IA. Puedo analizar zonas calientes y "
    "sugerir dónde enfocar la publicidad basándome en la densidad de votos actual."
)

QUICK_ACTIONS: Dict[str, str] = {
    "Sugerir Publicidad": (
        "Identifica las 3 zonas con mayor concentración de votos y sugiere una "
        "estrategia de publicidad enfocada (vallas, volantes) en esos puntos exactos."
    ),
    "Ir al Líder": "¿Cómo llego al puesto de votación con más votos registrados?",
}

EMPTY_REPLY = "Lo siento, no pude generar una estrategia en este momento."
ERROR_REPLY = "Error analizando la estrategia. Intente nuevamente."


def zone_summary_lines(locations: List[LocationData]) -> List[str]:
    return [
        f"- {zone}: {total} votos totales."
        for zone, total in zone_totals(locations, limit=SUMMARY_MAX_ZONES)
    ]


def top_place_lines(locations: List[LocationData]) -> List[str]:
    return [
        f'- Puesto "{loc.name}" en {loc.parent_location} con {loc.total_votes} votos.'
        for loc in top_polling_places(locations, SUMMARY_TOP_PLACES)
    ]


def build_system_instruction(locations: List[LocationData]) -> str:
    """Construit la consigne système à partir des agrégats courants.

    Args:
        locations: puestos agrégés.

    Returns:
        Texte (en espagnol) transmis au modèle.
    """
    zones = "\n".join(zone_summary_lines(locations))
    places = "\n".join(top_place_lines(locations))

    return f"""Eres "EstrategaBot", el experto en marketing político y geografía electoral de VotoVisión Antioquia.

ESTADÍSTICAS ACTUALES:
- Total General de Votos en Mapa: {grand_total(locations)}

DESGLOSE POR ZONAS (Mayor a menor densidad):
{zones}

TOP {SUMMARY_TOP_PLACES} PUESTOS DE VOTACIÓN (Puntos Calientes):
{places}

TU MISIÓN:
1. ANALISTA DE CAMPAÑA: Identifica dónde están los votos. Si el usuario pregunta por "Estrategia" o "Publicidad", sugiere enfocar recursos (vallas, volanteo, eventos) en los puestos y zonas con MAYOR densidad de votos listados arriba.
2. CONSULTOR GEOGRÁFICO: Usa Google Maps para ubicar estos puestos clave.

REGLAS DE RESPUESTA:
- Si preguntan "Sugerir publicidad", responde con un plan de acción concreto: "Basado en la alta densidad, recomiendo instalar vallas cerca de [Puesto Top 1] y [Puesto Top 2] en la comuna [Zona], ya que concentran X votos."
- Sé persuasivo y estratégico.
- Respuestas concisas en español.
"""
