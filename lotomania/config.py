from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal, Optional

Modo = Literal["aleatorio", "completar_fixas", "excluir_dezenas"]
Estrategia = Literal["hot", "cold", "balanced", "unseen"]

@dataclass(frozen=True)
class LotterySpec:
    modalidade: str
    n_min_dezena: int
    n_max_dezena: int
    n_dezenas_aposta: int
    n_dezenas_sorteio: int
    qtd_min: int
    qtd_max: int
    top_quentes_frias: int
    limite_baixo: int

LOTOMANIA = LotterySpec(
    modalidade="Lotomania",
    n_min_dezena=0,
    n_max_dezena=99,
    n_dezenas_aposta=50,
    n_dezenas_sorteio=20,
    qtd_min=1,
    qtd_max=100,
    top_quentes_frias=20,
    limite_baixo=49,
)

MODOS: dict[str, Modo] = {
    "Aleatório puro": "aleatorio",
    "Completar dezenas fixas": "completar_fixas",
    "Excluir dezenas": "excluir_dezenas",
}

ESTRATEGIAS: dict[str, Estrategia] = {
    "Quentes": "hot",
    "Frias": "cold",
    "Balanceada": "balanced",
    "Pouco vistas": "unseen",
}

MAX_UPLOAD_BYTES = 5 * 1024 * 1024
EXTENSOES_PLANILHA = (".xlsx",)
EXTENSOES_TEXTO = (".csv", ".txt")
EXTENSOES_ACEITAS = EXTENSOES_PLANILHA + EXTENSOES_TEXTO

# rótulo da primeira coluna no cabeçalho das planilhas da Caixa
ROTULO_CABECALHO = "concurso"

URL_LOTOMANIA_DOWNLOAD = (
    "https://servicebus2.caixa.gov.br/portaldeloterias/api/resultados/download"
    "?modalidade=Lotomania"
)


@dataclass(frozen=True)
class Settings:
    llm_url: Optional[str]
    llm_api_key: Optional[str]
    llm_model: str
    llm_timeout: float
    store_path: str
    log_level: str


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} deve ser numérico, recebido: {raw!r}") from None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings(
        llm_url=os.environ.get("LOTOMANIA_LLM_URL") or None,
        llm_api_key=os.environ.get("LOTOMANIA_LLM_API_KEY") or None,
        llm_model=os.environ.get("LOTOMANIA_LLM_MODEL", "gemini-2.5-flash"),
        llm_timeout=_env_float("LOTOMANIA_LLM_TIMEOUT", 120.0),
        store_path=os.environ.get("LOTOMANIA_STORE_PATH", "data/lotomania_store.json"),
        log_level=os.environ.get("LOTOMANIA_LOG_LEVEL", "INFO").upper(),
    )
