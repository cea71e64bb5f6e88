import logging

import streamlit as st

from lotomania.analytics import freq_top_df
from lotomania.analytics_cached import cached_estatisticas, cached_frequencias
from lotomania.config import get_settings
from lotomania.errors import CollaboratorError, ParseError
from lotomania.history_cached import load_history_cached
from lotomania.logging_setup import configure_logging
from lotomania.state import clear_history, get_history_origem, get_owner, init_state, set_history, set_owner
from lotomania.ui_components import ensure_history, header_cards, stats_cards

configure_logging(get_settings().log_level)
logger = logging.getLogger("lotomania.app")

st.set_page_config(page_title="Lotomania Helper", page_icon="🍀", layout="wide")

init_state()

st.title("Lotomania Helper")
st.caption("Gere, importe e analise apostas da Lotomania (00–99, 50 dezenas por aposta).")

owner = st.sidebar.text_input("Usuário", value=get_owner(), help="Modelos e histórico são salvos por usuário.")
set_owner(owner)

col1, col2 = st.columns(2)
with col1:
    if st.button("Usar resultados de exemplo"):
        clear_history()
        st.rerun()

with col2:
    if st.button("Baixar histórico da Caixa"):
        with st.spinner("Baixando histórico da Caixa..."):
            try:
                set_history(load_history_cached(), "Caixa")
            except (CollaboratorError, ParseError) as e:
                logger.warning("Falha no download da Caixa: %s", e)
                st.error(f"Falha ao baixar/ler histórico: {e}")
            else:
                st.rerun()

records = ensure_history()
header_cards(records, get_history_origem())

st.subheader("Dezenas quentes e frias")
stats_cards(cached_estatisticas(tuple(records)))
st.bar_chart(freq_top_df(cached_frequencias(tuple(records))))

st.info("Use as páginas no menu lateral: Gerar apostas, Importar, Resultados, Modelos e Histórico.")
