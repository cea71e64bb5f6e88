from __future__ import annotations

import pandas as pd
import streamlit as st

from lotomania.errors import PersistenceError
from lotomania.state import get_owner, get_store, init_state
from lotomania.ui import formatar_timestamp

st.set_page_config(page_title="Histórico", page_icon="🕘", layout="wide")
init_state()

st.title("Histórico de atividades")

TIPOS = {
    "generation": "Geração",
    "import": "Importação",
    "export": "Exportação",
    "template_creation": "Modelo criado",
}

limite = st.sidebar.selectbox("Mostrar", [20, 50, 100, 500], index=1)

try:
    eventos = get_store().listar_historico(get_owner(), limit=int(limite))
except PersistenceError as e:
    st.error(str(e))
    st.stop()

if not eventos:
    st.info("Nenhuma atividade registrada.")
    st.stop()

df = pd.DataFrame(
    [
        {
            "quando": formatar_timestamp(ev.timestamp),
            "tipo": TIPOS.get(ev.type, ev.type),
            "detalhes": ", ".join(f"{k}={v}" for k, v in ev.details.items() if k != "criteria"),
        }
        for ev in eventos
    ]
)
st.dataframe(df, hide_index=True)
