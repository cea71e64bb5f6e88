from __future__ import annotations

from datetime import datetime

import numpy as np
import streamlit as st

from lotomania.analytics_cached import cached_estatisticas
from lotomania.config import ESTRATEGIAS, LOTOMANIA, MODOS
from lotomania.domain_lottery import formatar_aposta, gerar_apostas, validar_criterios
from lotomania.errors import CollaboratorError, PersistenceError, ValidationError
from lotomania.llm_client import HttpBetSuggester, SuggestBetsRequest, SuggestCriteriaRequest
from lotomania.models import GenerationCriteria
from lotomania.reports import (
    apostas_com_criterios_txt,
    apostas_to_csv_bytes,
    apostas_to_df,
    apostas_to_json_bytes,
    apostas_to_txt_bytes,
    make_zip_bytes,
)
from lotomania.state import clear_bets, get_bets, get_last_criteria, get_owner, get_store, init_state, set_bets
from lotomania.ui import parse_lista
from lotomania.ui_components import ensure_history

st.set_page_config(page_title="Gerar apostas", page_icon="🎲", layout="wide")
init_state()

st.title("Gerar apostas")
st.caption("Crie novas apostas para a Lotomania usando critérios.")

records = ensure_history()
store = get_store()
owner = get_owner()

# --------------------------
# Sidebar
# --------------------------
st.sidebar.title("Configurações")

if st.sidebar.button("Limpar apostas"):
    clear_bets()
    st.toast("Apostas limpas", icon="🧹")
    st.rerun()

try:
    templates = store.listar_templates(owner)
except PersistenceError as e:
    st.sidebar.error(str(e))
    templates = []

with st.sidebar.expander("Pedir ideias de critérios à IA", expanded=False):
    pedido = st.text_area("O que você procura?", placeholder="Ex: apostas equilibradas entre dezenas altas e baixas")
    if st.button("Sugerir critérios") and pedido.strip():
        try:
            with st.spinner("Consultando a IA..."):
                sugestao = HttpBetSuggester().suggest_criteria(SuggestCriteriaRequest(user_query=pedido))
        except CollaboratorError as e:
            st.error(f"{e} Tente novamente.")
        else:
            st.markdown(sugestao.suggested_criteria)

base = GenerationCriteria(mode="aleatorio", quantity=10)
if templates:
    nomes = ["-"] + [t.name for t in templates]
    escolhido = st.sidebar.selectbox("Carregar modelo", nomes)
    if escolhido != "-":
        base = GenerationCriteria.from_dict(next(t for t in templates if t.name == escolhido).criteria)

# --------------------------
# Formulário
# --------------------------
rotulos_modo = list(MODOS.keys())
modo_label = st.radio(
    "Modo de geração",
    rotulos_modo,
    index=list(MODOS.values()).index(base.mode),
    horizontal=True,
)
modo = MODOS[modo_label]

qtd = st.number_input(
    "Quantidade de apostas",
    min_value=LOTOMANIA.qtd_min,
    max_value=LOTOMANIA.qtd_max,
    value=max(LOTOMANIA.qtd_min, min(LOTOMANIA.qtd_max, base.quantity)),
    step=1,
)

fixas_txt = ""
excl_txt = ""
if modo == "completar_fixas":
    fixas_txt = st.text_input(
        "Dezenas fixas",
        value=" ".join(map(str, base.manual_inclusion)),
        placeholder="Ex: 0, 7, 13",
    )
elif modo == "excluir_dezenas":
    excl_txt = st.text_input(
        "Dezenas a excluir",
        value=" ".join(map(str, base.manual_exclusion)),
        placeholder="Ex: 1, 2, 3",
    )

usar_ia = st.checkbox("Sugerir com IA a partir do histórico", value=base.strategy is not None)
estrategia = None
if usar_ia:
    rotulos_estr = list(ESTRATEGIAS.keys())
    idx = list(ESTRATEGIAS.values()).index(base.strategy) if base.strategy in ESTRATEGIAS.values() else 2
    estrategia = ESTRATEGIAS[st.selectbox("Estratégia", rotulos_estr, index=idx)]

criteria = GenerationCriteria(
    mode=modo,
    quantity=int(qtd),
    manual_inclusion=tuple(parse_lista(fixas_txt)),
    manual_exclusion=tuple(parse_lista(excl_txt)),
    strategy=estrategia,
)

gerar = st.button("Gerar apostas", type="primary")

# --------------------------
# Execução
# --------------------------
if gerar and not usar_ia:
    result = gerar_apostas(criteria, rng=np.random.default_rng())
    if result.error:
        st.error(result.error)
    else:
        if result.warning:
            st.warning(result.warning)
        set_bets(result.bets, criteria)
        st.toast(f"Geradas {len(result.bets)} apostas", icon="🎲")
        try:
            store.registrar_evento(owner, "generation", {"criteria": criteria.to_dict(), "apostas": len(result.bets)})
        except PersistenceError as e:
            st.warning(f"Apostas geradas, mas o histórico não foi salvo: {e}")

if gerar and usar_ia:
    try:
        validar_criterios(criteria)
        stats = cached_estatisticas(tuple(records))
        with st.spinner("Consultando a IA..."):
            resposta = HttpBetSuggester().suggest_bets(SuggestBetsRequest.from_criteria(stats, criteria))
    except ValidationError as e:
        st.error(str(e))
    except CollaboratorError as e:
        st.error(f"{e} Tente novamente.")
    else:
        bets = [tuple(s) for s in resposta.suggestions]
        set_bets(bets, criteria)
        st.success(resposta.analysis)
        try:
            store.registrar_evento(owner, "generation", {"criteria": criteria.to_dict(), "apostas": len(bets), "ia": True})
        except PersistenceError as e:
            st.warning(f"Apostas geradas, mas o histórico não foi salvo: {e}")

# --------------------------
# Resultado
# --------------------------
bets = get_bets()
ultimo_criterio = get_last_criteria()

def registrar_exportacao(formato: str) -> None:
    try:
        store.registrar_evento(owner, "export", {"formato": formato, "apostas": len(get_bets())})
    except PersistenceError as e:
        st.toast(f"Histórico não salvo: {e}", icon="⚠️")


if not bets:
    st.info("Gere apostas para exibir.")
    st.stop()

st.subheader(f"Resultados ({len(bets)} apostas)")
tab1, tab2, tab3 = st.tabs(["Apostas", "Exportar", "Salvar como modelo"])

with tab1:
    for i, b in enumerate(bets, start=1):
        st.code(f"{i:03d} | {formatar_aposta(b)}")

with tab2:
    st.dataframe(apostas_to_df(bets, com_resumo=True), hide_index=True)
    hoje = datetime.now().date()
    csv_bytes = apostas_to_csv_bytes(bets)
    txt_bytes = apostas_to_txt_bytes(bets)
    json_bytes = apostas_to_json_bytes(bets)

    c1, c2, c3, c4 = st.columns(4)
    c1.download_button(
        "CSV", data=csv_bytes, file_name=f"lotomania_{hoje}.csv", mime="text/csv",
        on_click=registrar_exportacao, args=("csv",),
    )
    c2.download_button(
        "TXT", data=txt_bytes, file_name=f"lotomania_{hoje}.txt", mime="text/plain",
        on_click=registrar_exportacao, args=("txt",),
    )
    c3.download_button(
        "JSON", data=json_bytes, file_name=f"lotomania_{hoje}.json", mime="application/json",
        on_click=registrar_exportacao, args=("json",),
    )
    if ultimo_criterio is not None:
        zip_bytes = make_zip_bytes(
            [
                (f"lotomania_{hoje}.csv", csv_bytes),
                (f"lotomania_{hoje}.txt", txt_bytes),
                (f"lotomania_{hoje}.json", json_bytes),
                (f"lotomania_criterios_{hoje}.txt", apostas_com_criterios_txt(bets, ultimo_criterio)),
            ]
        )
        c4.download_button(
            "Tudo (ZIP)", data=zip_bytes, file_name=f"bundle_lotomania_{hoje}.zip", mime="application/zip",
            on_click=registrar_exportacao, args=("zip",),
        )

with tab3:
    if ultimo_criterio is None:
        st.info("Sem critérios para salvar.")
    else:
        with st.form("salvar_modelo"):
            nome = st.text_input("Nome do modelo")
            descricao = st.text_area("Descrição (opcional)")
            if st.form_submit_button("Salvar"):
                try:
                    tpl = store.salvar_template(owner, nome, ultimo_criterio, descricao)
                    store.registrar_evento(owner, "template_creation", {"template": tpl.name})
                except PersistenceError as e:
                    st.error(str(e))
                else:
                    st.toast(f"Modelo '{tpl.name}' salvo", icon="✅")
