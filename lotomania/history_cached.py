from __future__ import annotations

import streamlit as st

from .data_caixa import load_history_from_caixa
from .models import DrawRecord


@st.cache_data(ttl=3600, show_spinner=False)
def load_history_cached() -> list[DrawRecord]:
    """
    Cacheia o histórico da Caixa por 1h para não rebaixar a planilha a cada rerun.
    """
    return load_history_from_caixa()
