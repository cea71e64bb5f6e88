from __future__ import annotations

from typing import Optional

import streamlit as st

from .config import get_settings
from .models import Bet, DrawRecord, GenerationCriteria
from .store import JsonStore

HIST_KEY = "history_records"  # list[DrawRecord]
HIST_ORIGEM_KEY = "history_origem"
BETS_KEY = "generated_bets"  # list[Bet]
CRITERIA_KEY = "last_criteria"
OWNER_KEY = "owner"

def init_state() -> None:
    st.session_state.setdefault(HIST_KEY, None)
    st.session_state.setdefault(HIST_ORIGEM_KEY, None)
    st.session_state.setdefault(BETS_KEY, [])
    st.session_state.setdefault(CRITERIA_KEY, None)
    st.session_state.setdefault(OWNER_KEY, "local")

def get_history() -> Optional[list[DrawRecord]]:
    return st.session_state[HIST_KEY]

def get_history_origem() -> Optional[str]:
    return st.session_state[HIST_ORIGEM_KEY]

def set_history(records: list[DrawRecord], origem: str) -> None:
    st.session_state[HIST_KEY] = records
    st.session_state[HIST_ORIGEM_KEY] = origem

def clear_history() -> None:
    st.session_state[HIST_KEY] = None
    st.session_state[HIST_ORIGEM_KEY] = None

def get_bets() -> list[Bet]:
    return st.session_state[BETS_KEY]

def set_bets(bets: list[Bet], criteria: Optional[GenerationCriteria]) -> None:
    st.session_state[BETS_KEY] = bets
    st.session_state[CRITERIA_KEY] = criteria

def get_last_criteria() -> Optional[GenerationCriteria]:
    return st.session_state[CRITERIA_KEY]

def clear_bets() -> None:
    st.session_state[BETS_KEY] = []
    st.session_state[CRITERIA_KEY] = None

def get_owner() -> str:
    return st.session_state[OWNER_KEY]

def set_owner(owner: str) -> None:
    st.session_state[OWNER_KEY] = owner.strip() or "local"

@st.cache_resource
def get_store() -> JsonStore:
    return JsonStore(get_settings().store_path)
