"""État de session du tableau de bord, indépendant de Streamlit.

Chaque nouveau fichier chargé (même nom, contenu différent) remplace en bloc
les registres, les agrégats et l'historique de conversation.
"""

from __future__ import annotations

import hashlib
from typing import List, MutableMapping, Optional

from votovision.assistant.prompts import WELCOME_MESSAGE
from votovision.data.schemas import ChatMessage, LocationData, VoteRecord


def upload_fingerprint(raw: bytes) -> str:
    """Empreinte du contenu d'un fichier chargé."""
    return hashlib.md5(raw).hexdigest()


def welcome_history() -> List[ChatMessage]:
    return [ChatMessage(id="welcome", role="model", text=WELCOME_MESSAGE)]


def needs_reload(state: MutableMapping, fingerprint: str) -> bool:
    """Vrai si le fichier chargé n'est pas celui déjà affiché."""
    return state.get("upload_key") != fingerprint


def reset_dataset(
    state: MutableMapping,
    records: List[VoteRecord],
    locations: List[LocationData],
    source: str,
    upload_key: Optional[str] = None,
):
    """Remplace les données courantes et repart d'une conversation vierge.

    Args:
        state: st.session_state (ou tout mapping).
        records: registres parsés.
        locations: puestos agrégés.
        source: libellé de la source (nom du fichier).
        upload_key: empreinte du fichier chargé (None pour l'échantillon).
    """
    state["records"] = records
    state["locations"] = locations
    state["source"] = source
    state["upload_key"] = upload_key
    state["chat_ready"] = False
    state["messages"] = welcome_history()
