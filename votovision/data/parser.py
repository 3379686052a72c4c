"""Parsing des exports CSV de la Registraduría.

Format (une ligne = une mesa × un candidat, ≥ 17 colonnes) :

    0 cod. departamento   1 departamento    2 cod. municipio   3 municipio
    4 zona                5 puesto (code)   6 nom du puesto    7 mesa
    8 cod. comuna         9 comuna         10 cod. corporación 11 corporación
   12 (inutilisé)        13 cod. partido   14 partido         15 cod. candidato
   16 candidato         dernier champ = votos

Parsing best-effort : une ligne vide, trop courte ou dont le dernier champ
n'est pas un entier est ignorée sans erreur.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from pydantic import ValidationError

from votovision.config import FIELD_DELIMITER, FIELD_QUOTE, MIN_FIELDS
from votovision.data.schemas import VoteRecord

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"[+-]?[0-9]+")


def split_fields(line: str) -> List[str]:
    """Découpe une ligne sur les virgules hors guillemets.

    Les guillemets sont optionnels par champ et retirés ; un guillemet
    doublé à l'intérieur d'un champ entre guillemets donne un guillemet
    littéral. Chaque champ est nettoyé des espaces.

    Args:
        line: ligne brute (sans saut de ligne).

    Returns:
        Liste des champs.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    i = 0
    n = len(line)

    while i < n:
        char = line[i]
        if char == FIELD_QUOTE:
            if in_quotes and i + 1 < n and line[i + 1] == FIELD_QUOTE:
                current.append(FIELD_QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif char == FIELD_DELIMITER and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    fields.append("".join(current).strip())
    return fields


def parse_votes(value: str) -> Optional[int]:
    """Entier base 10 ou None."""
    if not _INTEGER.fullmatch(value):
        return None
    return int(value, 10)


def parse_line(line: str) -> Optional[VoteRecord]:
    """Convertit une ligne en VoteRecord, ou None si elle est inexploitable."""
    if not line.strip():
        return None

    parts = split_fields(line)
    if len(parts) < MIN_FIELDS:
        return None

    votes = parse_votes(parts[-1])
    if votes is None:
        return None

    try:
        return VoteRecord(
            department_code=parts[0],
            department_name=parts[1],
            municipality_code=parts[2],
            municipality_name=parts[3],
            zone_code=parts[4],
            sector_code=parts[5],
            polling_place_name=parts[6],
            table_number=parts[7],
            commune_code=parts[8],
            commune_name=parts[9],
            corporation_code=parts[10],
            corporation_name=parts[11],
            # Colonnes non contiguës : ordre de l'export Registraduría, conservé tel quel
            candidate_code=parts[15],
            candidate_name=parts[16],
            party_code=parts[13],
            party_name=parts[14],
            votes=votes,
        )
    except ValidationError:
        # votes négatifs
        return None


def iter_records(lines: Iterable[str]):
    """Génère les VoteRecord valides, dans l'ordre des lignes."""
    for line in lines:
        record = parse_line(line)
        if record is not None:
            yield record


def parse_csv(text: str) -> List[VoteRecord]:
    """Parse un export complet.

    Args:
        text: contenu brut du fichier.

    Returns:
        Liste des registres valides, dans l'ordre d'entrée.
    """
    # "\n" uniquement : les champs peuvent contenir U+0085 ou U+2028
    records = list(iter_records(text.split("\n")))
    logger.debug("%d registros leídos", len(records))
    return records
