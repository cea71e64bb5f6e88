from __future__ import annotations

import streamlit as st

from lotomania.analytics import calcular_estatisticas, freq_top_df, frequencias
from lotomania.config import EXTENSOES_ACEITAS, LOTOMANIA, MAX_UPLOAD_BYTES
from lotomania.data_upload import parse_resultados, records_to_df, validar_upload
from lotomania.errors import CollaboratorError, ParseError, PersistenceError, ValidationError
from lotomania.llm_client import AnalyzeImportedDataRequest, HttpBetSuggester, StatsPayload
from lotomania.models import GenerationCriteria
from lotomania.reports import apostas_to_csv_bytes
from lotomania.state import get_owner, get_store, init_state, set_bets, set_history
from lotomania.ui_components import stats_cards

st.set_page_config(page_title="Importar", page_icon="📥", layout="wide")
init_state()

st.title("Importar resultados")
st.caption(
    "Envie uma planilha ou texto com: concurso, data e as 20 dezenas sorteadas "
    f"(máx. {MAX_UPLOAD_BYTES // 1024 // 1024} MB)."
)

arquivo = st.file_uploader("Arquivo", type=[e.lstrip(".") for e in EXTENSOES_ACEITAS])
if arquivo is None:
    st.info("Selecione um arquivo para começar.")
    st.stop()

try:
    validar_upload(arquivo.name, arquivo.size)
    outcome = parse_resultados(arquivo.getvalue(), arquivo.name)
except (ValidationError, ParseError) as e:
    st.error(str(e))
    st.stop()

if not outcome.records:
    st.error("Nenhuma linha válida encontrada no arquivo.")
    st.stop()

st.success(f"{outcome.valid_rows} linhas válidas processadas ({outcome.invalid_rows} descartadas).")

# registra uma vez por arquivo; o Streamlit reexecuta a página a cada clique
chave_import = f"import_registrado:{arquivo.name}:{arquivo.size}"
if not st.session_state.get(chave_import):
    try:
        get_store().registrar_evento(
            get_owner(),
            "import",
            {"arquivo": arquivo.name, "validas": outcome.valid_rows, "invalidas": outcome.invalid_rows},
        )
    except PersistenceError as e:
        st.warning(f"Histórico não salvo: {e}")
    else:
        st.session_state[chave_import] = True

if st.button("Usar como histórico da sessão"):
    set_history(outcome.records, arquivo.name)
    st.toast("Histórico atualizado", icon="✅")

stats = calcular_estatisticas(outcome.records)
freq_df = frequencias(outcome.records)

tab1, tab2, tab3 = st.tabs(["Estatísticas", "Dados", "Análise com IA"])

with tab1:
    stats_cards(stats)
    st.bar_chart(freq_top_df(freq_df, top=LOTOMANIA.top_quentes_frias))

with tab2:
    st.dataframe(records_to_df(outcome.records), hide_index=True)

with tab3:
    qtd = st.number_input("Apostas sugeridas", min_value=LOTOMANIA.qtd_min, max_value=10, value=3, step=1)
    if st.button("Analisar com IA", type="primary"):
        try:
            with st.spinner("Consultando a IA..."):
                resposta = HttpBetSuggester().analyze_imported_data(
                    AnalyzeImportedDataRequest(stats=StatsPayload.from_stats(stats), number_of_bets=int(qtd))
                )
        except CollaboratorError as e:
            st.error(f"{e} Tente novamente.")
        else:
            bets = [tuple(s) for s in resposta.suggestions]
            set_bets(bets, GenerationCriteria(mode="aleatorio", quantity=len(bets), strategy="balanced"))
            st.markdown(resposta.analysis)
            st.download_button(
                "Baixar sugestões (CSV)",
                data=apostas_to_csv_bytes(bets),
                file_name="lotomania_sugestoes.csv",
                mime="text/csv",
            )
