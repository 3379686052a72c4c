"""Client de conversation Gemini (google-genai).

L'assistant reçoit les agrégats sous forme de consigne système et peut
s'appuyer sur Google Maps pour situer les puestos. Toute erreur du service
est convertie en message lisible : le pipeline de données n'en dépend pas.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from google import genai
from google.genai import types

from votovision.assistant.prompts import EMPTY_REPLY, ERROR_REPLY, build_system_instruction
from votovision.config import get_api_key, get_model_name
from votovision.data.schemas import GroundingChunk, GroundingSource, LocationData

logger = logging.getLogger(__name__)


@dataclass
class ChatReply:
    """Réponse de l'assistant."""
    text: str
    grounding_chunks: List[GroundingChunk] = field(default_factory=list)


def _source(raw: Any) -> Optional[GroundingSource]:
    if raw is None:
        return None
    return GroundingSource(uri=getattr(raw, "uri", None), title=getattr(raw, "title", None))


def extract_grounding_chunks(response: Any) -> List[GroundingChunk]:
    """Extrait les références web/Maps du premier candidat de la réponse."""
    candidates = getattr(response, "candidates", None) or []
    if not candidates:
        return []
    metadata = getattr(candidates[0], "grounding_metadata", None)
    raw_chunks = getattr(metadata, "grounding_chunks", None) or []
    return [
        GroundingChunk(web=_source(getattr(c, "web", None)), maps=_source(getattr(c, "maps", None)))
        for c in raw_chunks
    ]


def build_chat_config(
    locations: List[LocationData],
    user_location: Optional[Tuple[float, float]] = None,
) -> types.GenerateContentConfig:
    """Configuration de session : consigne système + outil Google Maps.

    Args:
        locations: puestos agrégés.
        user_location: (lat, lng) de l'utilisateur, pour ancrer la recherche Maps.
    """
    tool_config = None
    if user_location is not None:
        lat, lng = user_location
        tool_config = types.ToolConfig(
            retrieval_config=types.RetrievalConfig(
                lat_lng=types.LatLng(latitude=lat, longitude=lng),
            ),
        )
    return types.GenerateContentConfig(
        system_instruction=build_system_instruction(locations),
        tools=[types.Tool(google_maps=types.GoogleMaps())],
        tool_config=tool_config,
    )


class StrategyChat:
    """Session de conversation avec l'estratega IA."""

    def __init__(self, client: Optional[Any] = None, model: Optional[str] = None):
        """
        Args:
            client: client genai déjà construit (sinon créé avec la clé d'environnement).
            model: nom du modèle (par défaut get_model_name()).
        """
        self._client = client
        self.model = model or get_model_name()
        self._session = None

    @property
    def started(self) -> bool:
        return self._session is not None

    def _get_client(self):
        if self._client is None:
            api_key = get_api_key()
            if not api_key:
                raise RuntimeError(
                    "Clé API introuvable : définir GEMINI_API_KEY ou GOOGLE_API_KEY."
                )
            self._client = genai.Client(api_key=api_key)
        return self._client

    def start(
        self,
        locations: List[LocationData],
        user_location: Optional[Tuple[float, float]] = None,
    ):
        """(Ré)initialise la session avec les agrégats courants.

        Un nouvel appel remplace la session précédente.
        """
        config = build_chat_config(locations, user_location)
        self._session = self._get_client().chats.create(model=self.model, config=config)
        logger.info("Session %s initialisée (%d puestos)", self.model, len(locations))

    def send(self, message: str) -> ChatReply:
        """Envoie un message et retourne la réponse (ou un message d'erreur)."""
        if self._session is None:
            raise RuntimeError("Session de conversation non initialisée")

        try:
            response = self._session.send_message(message)
        except Exception:
            logger.exception("Erreur de l'assistant Gemini")
            return ChatReply(text=ERROR_REPLY)

        return ChatReply(
            text=getattr(response, "text", None) or EMPTY_REPLY,
            grounding_chunks=extract_grounding_chunks(response),
        )
