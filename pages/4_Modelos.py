from __future__ import annotations

import streamlit as st

from lotomania.config import MODOS
from lotomania.errors import PersistenceError
from lotomania.models import GenerationCriteria
from lotomania.state import get_owner, get_store, init_state
from lotomania.ui import formatar_lista, formatar_timestamp

st.set_page_config(page_title="Modelos", page_icon="🔖", layout="wide")
init_state()

st.title("Modelos salvos")
st.caption("Critérios de geração salvos para reutilizar na página Gerar apostas.")

store = get_store()
owner = get_owner()

try:
    templates = store.listar_templates(owner)
except PersistenceError as e:
    st.error(str(e))
    st.stop()

if not templates:
    st.info("Nenhum modelo salvo ainda.")
    st.stop()

rotulo_modo = {v: k for k, v in MODOS.items()}

for tpl in templates:
    c = GenerationCriteria.from_dict(tpl.criteria)
    with st.container(border=True):
        st.markdown(f"**{tpl.name}** · {formatar_timestamp(tpl.created_at)}")
        if tpl.description:
            st.caption(tpl.description)
        st.write(f"Modo: {rotulo_modo.get(c.mode, c.mode)} | Quantidade: {c.quantity}")
        if c.manual_inclusion:
            st.write("Fixas:", formatar_lista(c.manual_inclusion))
        if c.manual_exclusion:
            st.write("Excluídas:", formatar_lista(c.manual_exclusion))
        if c.strategy:
            st.write("Estratégia IA:", c.strategy)
        if st.button("Excluir", key=f"del_{tpl.id}"):
            try:
                store.excluir_template(owner, tpl.id)
            except PersistenceError as e:
                st.error(str(e))
            else:
                st.rerun()
