import streamlit as st
import pandas as pd

from .analytics import calcular_estatisticas, frequencias
from .models import DrawRecord, FrequencyStats

@st.cache_data(show_spinner=False, ttl=60 * 60)  # 1h
def cached_frequencias(records: tuple[DrawRecord, ...]) -> pd.DataFrame:
    return frequencias(records)

@st.cache_data(show_spinner=False, ttl=60 * 60)
def cached_estatisticas(records: tuple[DrawRecord, ...]) -> FrequencyStats:
    return calcular_estatisticas(records)
