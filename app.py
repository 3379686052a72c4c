"""
Streamlit Frontend — VotoVisión Antioquia
==========================================
Carte de densité électorale + estratega IA
"""

import time

import streamlit as st
from streamlit_folium import st_folium

from votovision.assistant.gemini import ChatReply, StrategyChat
from votovision.assistant.prompts import QUICK_ACTIONS
from votovision.config import MAP_CENTER
from votovision.data.loader import DataLoader, decode_upload
from votovision.data.schemas import ChatMessage
from votovision.engine.aggregation import locations_to_frame, records_to_frame
from votovision.engine.summary import grand_total
from votovision.session import needs_reload, reset_dataset, upload_fingerprint, welcome_history
from votovision.viz.charts import bar_candidate_totals, bar_zone_totals
from votovision.viz.maps import build_vote_map, grounding_link_html


# =============================================================================
# PAGE CONFIG & CUSTOM CSS
# =============================================================================

st.set_page_config(
    page_title="VotoVisión Antioquia",
    page_icon="🗳️",
    layout="wide",
    initial_sidebar_state="collapsed",
)

st.markdown("""
<style>
    @import url('https://fonts.googleapis.com/css2?family=Inter:wght@300;400;500;600;700&display=swap');

    :root {
        --bg-card: #ffffff;
        --border-subtle: #e2e8f0;
        --text-muted: #64748b;
        --accent-blue: #2563eb;
        --accent-orange: #f97316;
    }

    .stApp {
        font-family: 'Inter', -apple-system, system-ui, sans-serif;
        background: #f8fafc;
    }

    #MainMenu, footer {visibility: hidden;}

    .stat-card {
        background: var(--bg-card);
        border: 1px solid var(--border-subtle);
        border-radius: 12px;
        padding: 14px 16px;
    }

    .stat-card.accent { border-left: 4px solid var(--accent-orange); }

    .stat-label {
        font-size: 11px;
        font-weight: 600;
        text-transform: uppercase;
        letter-spacing: 1.2px;
        color: var(--text-muted);
        margin: 0;
    }

    .stat-value {
        font-size: 20px;
        font-weight: 700;
        color: #0f172a;
        margin: 0;
    }

    .section-header {
        font-size: 11px;
        font-weight: 600;
        text-transform: uppercase;
        letter-spacing: 1.5px;
        color: var(--text-muted);
        margin-bottom: 12px;
    }

    .grounding-link {
        display: block;
        font-size: 12px;
        padding: 6px 10px;
        border: 1px solid var(--border-subtle);
        border-radius: 8px;
        margin-top: 6px;
        text-decoration: none;
    }
</style>
""", unsafe_allow_html=True)


# =============================================================================
# ÉTAT DE SESSION
# =============================================================================

loader = DataLoader()


def load_dataset(text: str, source: str, upload_key: str = None):
    """Parse + agrège, puis remplace entièrement les résultats précédents."""
    records = loader.load_records(text)
    reset_dataset(st.session_state, records, loader.aggregate(records), source, upload_key)


def start_chat():
    """(Ré)initialise l'assistant avec les agrégats courants."""
    chat = st.session_state.get("chat") or StrategyChat()
    st.session_state["chat"] = chat
    try:
        chat.start(st.session_state["locations"], st.session_state.get("user_location"))
        st.session_state["chat_error"] = None
    except RuntimeError as exc:
        st.session_state["chat_error"] = str(exc)
    st.session_state["chat_ready"] = True

    if not st.session_state.get("messages"):
        st.session_state["messages"] = welcome_history()


def send_message(text: str):
    if not text.strip():
        return

    chat = st.session_state.get("chat")
    messages = st.session_state["messages"]
    messages.append(ChatMessage(id=str(time.time_ns()), role="user", text=text))

    if chat is None or not chat.started:
        reply = ChatReply(text=st.session_state.get("chat_error") or "Asistente no disponible.")
    else:
        with st.spinner("Analizando..."):
            reply = chat.send(text)

    messages.append(ChatMessage(
        id=str(time.time_ns()),
        role="model",
        text=reply.text,
        grounding_chunks=reply.grounding_chunks,
    ))


if "locations" not in st.session_state:
    load_dataset(loader.sample_text(), "Muestra")


# =============================================================================
# SIDEBAR — ubicación del usuario (anclaje Google Maps)
# =============================================================================

with st.sidebar:
    st.markdown('<p class="section-header">Ubicación (opcional)</p>', unsafe_allow_html=True)
    use_location = st.checkbox("Usar mi ubicación para las rutas", value=False)
    if use_location:
        user_lat = st.number_input("Latitud", value=MAP_CENTER[0], format="%.5f")
        user_lng = st.number_input("Longitud", value=MAP_CENTER[1], format="%.5f")
        user_location = (float(user_lat), float(user_lng))
    else:
        user_location = None

    if user_location != st.session_state.get("user_location"):
        st.session_state["user_location"] = user_location
        st.session_state["chat_ready"] = False


# =============================================================================
# HEADER
# =============================================================================

hcol1, hcol2 = st.columns([3, 1])
with hcol1:
    st.markdown("""
    <h1 style="font-size: 24px; font-weight: 700; margin: 0;">
        VotoVisión <span style="font-weight: 400; color: #64748b;">Antioquia</span>
    </h1>
    """, unsafe_allow_html=True)
with hcol2:
    uploaded = st.file_uploader("Cargar CSV", type=["csv"], label_visibility="collapsed")

if uploaded is not None:
    raw = uploaded.getvalue()
    fingerprint = upload_fingerprint(raw)
    if needs_reload(st.session_state, fingerprint):
        load_dataset(decode_upload(raw), uploaded.name, fingerprint)

records = st.session_state["records"]
locations = st.session_state["locations"]

if locations and not st.session_state.get("chat_ready"):
    start_chat()


# =============================================================================
# STATS + ACTIONS RAPIDES
# =============================================================================

stats = [
    ("Registros", f"{len(records):,}", ""),
    ("Puestos", f"{len(locations):,}", ""),
    ("Votos Totales", f"{grand_total(locations):,}", "accent"),
]

cols = st.columns(len(stats) + len(QUICK_ACTIONS))
for col, (label, value, css) in zip(cols, stats):
    with col:
        st.markdown(f"""
        <div class="stat-card {css}">
            <p class="stat-label">{label}</p>
            <p class="stat-value">{value}</p>
        </div>
        """, unsafe_allow_html=True)

for col, (label, prompt) in zip(cols[len(stats):], QUICK_ACTIONS.items()):
    with col:
        if st.button(label, use_container_width=True, disabled=not locations):
            send_message(prompt)

if not locations:
    st.warning("Ningún registro del archivo corresponde a una zona conocida.")


# =============================================================================
# CARTE + ASSISTANT
# =============================================================================

col_map, col_chat = st.columns([2, 1])

with col_map:
    st.markdown('<p class="section-header">Mapa de densidad</p>', unsafe_allow_html=True)
    st_folium(build_vote_map(locations), height=620, use_container_width=True, returned_objects=[])
    st.caption("Datos visualizados sobre centroides aproximados de puestos de votación.")

with col_chat:
    st.markdown('<p class="section-header">Estratega IA</p>', unsafe_allow_html=True)
    if st.session_state.get("chat_error"):
        st.warning(st.session_state["chat_error"])

    history = st.container(height=520)
    prompt = st.chat_input("Consulta estrategia o ubicación...", disabled=not locations)
    if prompt:
        send_message(prompt)

    with history:
        for msg in st.session_state.get("messages", []):
            with st.chat_message("user" if msg.role == "user" else "assistant"):
                st.markdown(msg.text)
                for chunk in msg.grounding_chunks:
                    link = grounding_link_html(chunk)
                    if link:
                        st.markdown(link, unsafe_allow_html=True)

    st.caption("La IA puede sugerir estrategias basadas en los datos visibles.")


# =============================================================================
# GRAPHIQUES + TABLES
# =============================================================================

tab1, tab2, tab3 = st.tabs(["Zonas", "Candidatos", "Datos"])

with tab1:
    st.plotly_chart(bar_zone_totals(locations), use_container_width=True)

with tab2:
    st.plotly_chart(bar_candidate_totals(locations), use_container_width=True)

with tab3:
    st.markdown('<p class="section-header">Puestos agregados</p>', unsafe_allow_html=True)
    st.dataframe(locations_to_frame(locations), use_container_width=True, hide_index=True)
    with st.expander(f"Registros ({st.session_state['source']})"):
        st.dataframe(records_to_frame(records), use_container_width=True, hide_index=True)
