"""Chargement des exports CSV (échantillon embarqué ou fichier chargé)."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from votovision.data.parser import parse_csv
from votovision.data.schemas import LocationData, VoteRecord
from votovision.engine.aggregation import aggregate_by_location

logger = logging.getLogger(__name__)

SAMPLE_CSV = Path(__file__).resolve().parent / "sample_votos.csv"

# Les exports de la Registraduría sont souvent en Windows-1252 ou Latin-1
_ENCODINGS = ("utf-8-sig", "cp1252", "latin-1")


def decode_upload(raw: bytes) -> str:
    """Décode le contenu d'un fichier chargé (UTF-8, puis Windows-1252, puis Latin-1)."""
    for encoding in _ENCODINGS[:-1]:
        try:
            return raw.decode(encoding)
        except UnicodeDecodeError:
            logger.info("Décodage %s impossible, essai suivant", encoding)
    return raw.decode(_ENCODINGS[-1])


class DataLoader:
    """Point d'entrée unifié : texte brut → registres → puestos agrégés."""

    def __init__(self, coordinates: Optional[dict] = None):
        self.coordinates = coordinates

    def load_csv_text(self, path: Union[str, Path]) -> str:
        """Lit un fichier CSV depuis le disque.

        Args:
            path: chemin du fichier.

        Returns:
            Contenu texte.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Fichier introuvable : {path}")
        return decode_upload(path.read_bytes())

    def sample_text(self) -> str:
        """Export d'exemple embarqué dans le paquet."""
        return self.load_csv_text(SAMPLE_CSV)

    def load_records(self, text: str) -> List[VoteRecord]:
        records = parse_csv(text)
        logger.info("%d registros cargados", len(records))
        return records

    def aggregate(self, records: List[VoteRecord]) -> List[LocationData]:
        return aggregate_by_location(records, self.coordinates)
