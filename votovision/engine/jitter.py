"""Jitter déterministe des coordonnées.

Plusieurs puestos partagent le centroïde de leur comuna ; on les écarte
d'un décalage pseudo-aléatoire reproductible, dérivé du nom du puesto.

Le hash est celui de Java String.hashCode, calculé sur les unités UTF-16 :
repli `h = h * 31 + code` avec débordement signé 32 bits à chaque étape,
ce qui rend les positions identiques d'une plateforme à l'autre.
"""

from __future__ import annotations

from typing import Tuple

from votovision.config import (
    JITTER_LAT_SUFFIX,
    JITTER_LNG_SUFFIX,
    JITTER_RESOLUTION,
    JITTER_SPAN,
)

_UINT32 = 0xFFFFFFFF
_INT32_SIGN = 0x80000000


def _to_int32(value: int) -> int:
    value &= _UINT32
    return value - (1 << 32) if value & _INT32_SIGN else value


def _utf16_units(text: str):
    data = text.encode("utf-16-le", "surrogatepass")
    for i in range(0, len(data), 2):
        yield data[i] | (data[i + 1] << 8)


def string_hash(text: str) -> int:
    """Hash entier signé 32 bits d'une chaîne."""
    h = 0
    for code in _utf16_units(text):
        h = _to_int32(h * 31 + code)
    return h


def pseudo_random(text: str) -> float:
    """Valeur dans [0, 1) stable pour une même chaîne."""
    return (abs(string_hash(text)) % JITTER_RESOLUTION) / JITTER_RESOLUTION


def jitter_offset(key: str, axis: str) -> float:
    """Décalage en degrés dans [-JITTER_SPAN/2, JITTER_SPAN/2).

    Args:
        key: clé composite du puesto ("puesto-comuna").
        axis: discriminant ("lat" ou "lng").
    """
    return (pseudo_random(key + axis) - 0.5) * JITTER_SPAN


def jitter_coordinate(key: str, lat: float, lng: float) -> Tuple[float, float]:
    """Applique les deux décalages indépendants à un centroïde."""
    return (
        lat + jitter_offset(key, JITTER_LAT_SUFFIX),
        lng + jitter_offset(key, JITTER_LNG_SUFFIX),
    )
