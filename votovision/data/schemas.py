"""Modèles Pydantic pour les registres de vote et les agrégats."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class VoteRecord(BaseModel):
    """Une ligne de l'export de la Registraduría (mesa × candidat)."""
    model_config = ConfigDict(frozen=True)

    department_code: str
    department_name: str
    municipality_code: str
    municipality_name: str
    zone_code: str
    sector_code: str
    polling_place_name: str
    table_number: str
    commune_code: str
    commune_name: str
    corporation_code: str
    corporation_name: str
    candidate_code: str
    candidate_name: str
    party_code: str
    party_name: str
    votes: int = Field(ge=0)

    @property
    def parent_zone(self) -> str:
        """Comuna si renseignée, sinon municipio."""
        return self.commune_name or self.municipality_name


class LocationType(str, Enum):
    """PUESTO = puesto de votación ; ZONA réservé (non utilisé)."""
    PUESTO = "Puesto"
    ZONA = "Zona"


class GeoCoordinate(BaseModel):
    lat: float
    lng: float


class LocationData(BaseModel):
    """Puesto de votación agrégé, avec coordonnée synthétique."""
    name: str
    location_type: LocationType = LocationType.PUESTO
    parent_location: str
    lat: float
    lng: float
    total_votes: int = Field(ge=0, default=0)
    candidates: Dict[str, int] = Field(default_factory=dict)
    # candidates : dict nom candidat → nombre de voix

    @model_validator(mode="after")
    def total_matches_candidates(self):
        tallied = sum(self.candidates.values())
        if tallied != self.total_votes:
            raise ValueError(
                f"total_votes ({self.total_votes}) != somme des candidats ({tallied})"
            )
        return self

    def add_votes(self, candidate: str, votes: int):
        """Ajoute les voix d'un registre au total et au candidat."""
        self.total_votes += votes
        self.candidates[candidate] = self.candidates.get(candidate, 0) + votes

    @property
    def coordinate(self) -> GeoCoordinate:
        return GeoCoordinate(lat=self.lat, lng=self.lng)


# ---------------------------------------------------------------------------
# Assistant
# ---------------------------------------------------------------------------

class GroundingSource(BaseModel):
    uri: Optional[str] = None
    title: Optional[str] = None


class GroundingChunk(BaseModel):
    """Référence renvoyée par l'assistant (web ou Google Maps), opaque pour le cœur."""
    web: Optional[GroundingSource] = None
    maps: Optional[GroundingSource] = None


class ChatMessage(BaseModel):
    """Message affiché dans le panneau de conversation."""
    id: str
    role: Literal["user", "model"]
    text: str
    grounding_chunks: List[GroundingChunk] = Field(default_factory=list)
