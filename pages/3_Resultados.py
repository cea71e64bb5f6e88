from __future__ import annotations

import streamlit as st

from lotomania.data_upload import anos_disponiveis, filtrar_por_ano, records_to_df
from lotomania.domain_lottery import acertos
from lotomania.errors import CollaboratorError, ParseError
from lotomania.history_cached import load_history_cached
from lotomania.state import get_bets, get_history_origem, init_state, set_history
from lotomania.ui_components import ensure_history, header_cards

st.set_page_config(page_title="Resultados", page_icon="📊", layout="wide")
init_state()

st.title("Resultados da Lotomania")

if st.sidebar.button("Atualizar da Caixa"):
    with st.sidebar:
        with st.spinner("Baixando histórico..."):
            try:
                load_history_cached.clear()
                set_history(load_history_cached(), "Caixa")
            except (CollaboratorError, ParseError) as e:
                st.error(f"Falha ao baixar/ler histórico: {e}")
            else:
                st.toast("Resultados atualizados", icon="✅")

records = ensure_history()
header_cards(records, get_history_origem())
st.divider()

anos = anos_disponiveis(records)
ano = st.radio("Filtrar por ano", ["Todos", *anos], horizontal=True)
filtrados = sorted(filtrar_por_ano(records, ano), key=lambda r: r.contest_id, reverse=True)

df = records_to_df(filtrados)

bets = get_bets()
if bets:
    # maior número de acertos entre as apostas da sessão em cada concurso
    df["melhor_acerto"] = [max(acertos(b, r) for b in bets) for r in filtrados]
    st.caption("A coluna melhor_acerto compara cada concurso com as apostas geradas nesta sessão.")

st.dataframe(df, hide_index=True)
