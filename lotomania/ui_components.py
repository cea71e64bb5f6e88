from __future__ import annotations

import streamlit as st

from .config import LOTOMANIA
from .data_upload import load_sample_results
from .errors import ParseError
from .models import DrawRecord, FrequencyStats
from .state import get_history, set_history
from .ui import formatar_lista


def header_cards(records: list[DrawRecord], origem: str | None = None) -> None:
    """
    Cards padrão do histórico, reutilizados nas páginas.
    records: concursos já normalizados (mais recente primeiro ou não)
    """
    st.markdown(f"## {LOTOMANIA.modalidade}")

    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Concursos", len(records))
    if records:
        ultimo = max(records, key=lambda r: r.contest_id)
        c2.metric("Concurso max", ultimo.contest_id)
        c3.metric("Data do último", ultimo.date)
    else:
        c2.metric("Concurso max", "N/A")
        c3.metric("Data do último", "N/A")
    c4.metric("Universo", f"{LOTOMANIA.n_min_dezena:02d}–{LOTOMANIA.n_max_dezena}")

    if origem:
        st.caption(f"Origem dos dados: {origem}")


def stats_cards(stats: FrequencyStats) -> None:
    c1, c2 = st.columns(2)
    with c1:
        st.markdown("**Dezenas quentes**")
        st.code(formatar_lista(stats.hot_numbers))
    with c2:
        st.markdown("**Dezenas frias**")
        st.code(formatar_lista(stats.cold_numbers))


def ensure_history() -> list[DrawRecord]:
    """
    Garante um histórico na sessão: usa o que já foi importado/baixado
    ou, na falta, os resultados de exemplo embutidos.
    """
    records = get_history()
    if records is None:
        try:
            records = load_sample_results()
        except ParseError as e:
            st.error(str(e))
            st.stop()
        set_history(records, "resultados de exemplo")
    return records
