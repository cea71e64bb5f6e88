from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, TypeVar

import requests
from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from .config import Estrategia, LOTOMANIA, Settings, get_settings
from .domain_lottery import validar_aposta
from .errors import CollaboratorError, ResponseSchemaError
from .http_client import post_json
from .models import FrequencyStats, GenerationCriteria

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class StatsPayload(BaseModel):
    hot_numbers: List[int]
    cold_numbers: List[int]

    @classmethod
    def from_stats(cls, stats: FrequencyStats) -> "StatsPayload":
        return cls(hot_numbers=list(stats.hot_numbers), cold_numbers=list(stats.cold_numbers))

class SuggestBetsRequest(BaseModel):
    stats: StatsPayload
    strategy: Estrategia = "balanced"
    number_of_bets: int = Field(ge=LOTOMANIA.qtd_min, le=LOTOMANIA.qtd_max)
    manual_inclusion: List[int] = Field(default_factory=list)
    manual_exclusion: List[int] = Field(default_factory=list)

    @classmethod
    def from_criteria(cls, stats: FrequencyStats, criteria: GenerationCriteria) -> "SuggestBetsRequest":
        return cls(
            stats=StatsPayload.from_stats(stats),
            strategy=criteria.strategy or "balanced",
            number_of_bets=criteria.quantity,
            manual_inclusion=list(criteria.manual_inclusion),
            manual_exclusion=list(criteria.manual_exclusion),
        )

class AnalyzeImportedDataRequest(BaseModel):
    stats: StatsPayload
    number_of_bets: int = Field(ge=LOTOMANIA.qtd_min, le=LOTOMANIA.qtd_max)

class SuggestionsResponse(BaseModel):
    suggestions: List[List[int]]
    analysis: str

class SuggestCriteriaRequest(BaseModel):
    user_query: str = Field(min_length=1)

class SuggestCriteriaResponse(BaseModel):
    suggested_criteria: str


DESCRICAO_ESTRATEGIAS = {
    "hot": "priorize as dezenas quentes.",
    "cold": "priorize as dezenas frias.",
    "balanced": "misture quentes, frias e dezenas de frequência intermediária.",
    "unseen": "priorize dezenas que não estão nem entre as quentes nem entre as frias.",
}

PROMPT_SUGERIR_APOSTAS = """Você é um analista especialista na Lotomania (dezenas de 00 a 99).
Estatísticas do histórico:
- Dezenas quentes (mais frequentes): {quentes}
- Dezenas frias (menos frequentes): {frias}

Pedido:
- Estratégia "{estrategia}": {descricao}
- Gere {qtd} apostas, cada uma com exatamente 50 dezenas distintas entre 0 e 99.
- Dezenas que DEVEM estar em todas as apostas: {incluir}
- Dezenas que NÃO podem aparecer: {excluir}

Explique brevemente a análise e as escolhas no campo "analysis".
Responda somente com um objeto JSON válido no formato:
{{"suggestions": [[50 dezenas], ...], "analysis": "texto"}}
"""

PROMPT_ANALISAR_IMPORTADOS = """Você é um analista especialista na Lotomania.
Estatísticas extraídas do arquivo importado:
- Dezenas quentes (mais frequentes): {quentes}
- Dezenas frias (menos frequentes): {frias}

Sugira {qtd} apostas, cada uma com exatamente 50 dezenas distintas entre 0 e 99,
e resuma as tendências encontradas e como as usou no campo "analysis".
Responda somente com um objeto JSON válido no formato:
{{"suggestions": [[50 dezenas], ...], "analysis": "texto"}}
"""

PROMPT_SUGERIR_CRITERIOS = """Você é especialista em estratégias de loteria, em especial a Lotomania.
Com base no pedido do usuário, sugira critérios de geração de apostas
inspirados em estratégias populares.

Pedido do usuário: {pedido}

Responda somente com um objeto JSON válido no formato:
{{"suggested_criteria": "texto"}}
"""


def _lista(dezenas: List[int]) -> str:
    return ", ".join(f"{d:02d}" for d in dezenas) if dezenas else "Nenhuma"


def validar_sugestoes(
    resposta: SuggestionsResponse,
    incluir: Optional[List[int]] = None,
    excluir: Optional[List[int]] = None,
) -> SuggestionsResponse:
    """
    Mantém apenas sugestões com 50 dezenas distintas em 0–99 que respeitem
    as listas de inclusão e exclusão. Sem nenhuma sugestão válida, falha.
    """
    obrigatorias = set(incluir or ())
    proibidas = set(excluir or ())
    validas: List[List[int]] = []
    for s in resposta.suggestions:
        if not validar_aposta(s):
            continue
        dezenas = set(s)
        if not obrigatorias <= dezenas or dezenas & proibidas:
            continue
        validas.append(sorted(s))

    descartadas = len(resposta.suggestions) - len(validas)
    if descartadas:
        logger.warning("Descartadas %d de %d sugestões da IA fora do formato", descartadas, len(resposta.suggestions))
    if not validas:
        raise ResponseSchemaError("A IA não retornou nenhuma aposta válida com 50 dezenas. Tente novamente.")
    return SuggestionsResponse(suggestions=validas, analysis=resposta.analysis)


class BetSuggester(ABC):
    """Contrato com o serviço de IA: recebe um prompt e devolve JSON no schema pedido."""

    @abstractmethod
    def _completar(self, prompt: str, schema: type[BaseModel]) -> Any:
        ...

    def _chamar(self, prompt: str, schema: type[M]) -> M:
        bruto = self._completar(prompt, schema)
        if bruto is None:
            raise CollaboratorError("A IA não retornou uma resposta. Tente novamente.")
        if isinstance(bruto, str):
            try:
                bruto = json.loads(bruto)
            except ValueError as e:
                raise ResponseSchemaError(f"Resposta da IA não é JSON: {e}") from e
        try:
            return schema.model_validate(bruto)
        except PydanticValidationError as e:
            raise ResponseSchemaError(f"Resposta da IA fora do formato esperado: {e}") from e

    def suggest_bets(self, req: SuggestBetsRequest) -> SuggestionsResponse:
        prompt = PROMPT_SUGERIR_APOSTAS.format(
            quentes=_lista(req.stats.hot_numbers),
            frias=_lista(req.stats.cold_numbers),
            estrategia=req.strategy,
            descricao=DESCRICAO_ESTRATEGIAS[req.strategy],
            qtd=req.number_of_bets,
            incluir=_lista(req.manual_inclusion),
            excluir=_lista(req.manual_exclusion),
        )
        logger.info("Pedindo %d sugestões à IA (estratégia=%s)", req.number_of_bets, req.strategy)
        resposta = self._chamar(prompt, SuggestionsResponse)
        return validar_sugestoes(resposta, req.manual_inclusion, req.manual_exclusion)

    def analyze_imported_data(self, req: AnalyzeImportedDataRequest) -> SuggestionsResponse:
        prompt = PROMPT_ANALISAR_IMPORTADOS.format(
            quentes=_lista(req.stats.hot_numbers),
            frias=_lista(req.stats.cold_numbers),
            qtd=req.number_of_bets,
        )
        logger.info("Pedindo análise de dados importados à IA (%d apostas)", req.number_of_bets)
        return validar_sugestoes(self._chamar(prompt, SuggestionsResponse))

    def suggest_criteria(self, req: SuggestCriteriaRequest) -> SuggestCriteriaResponse:
        prompt = PROMPT_SUGERIR_CRITERIOS.format(pedido=req.user_query)
        return self._chamar(prompt, SuggestCriteriaResponse)


class HttpBetSuggester(BetSuggester):
    """
    Envia {model, prompt, response_schema} por POST ao endpoint configurado e
    espera no corpo da resposta o JSON já no schema pedido. Sem retry.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        if not self.settings.llm_url:
            raise CollaboratorError("Serviço de IA não configurado (defina LOTOMANIA_LLM_URL).")
        self.session = session

    def _completar(self, prompt: str, schema: type[BaseModel]) -> Any:
        headers = {"Content-Type": "application/json"}
        if self.settings.llm_api_key:
            headers["Authorization"] = f"Bearer {self.settings.llm_api_key}"
        payload = {
            "model": self.settings.llm_model,
            "prompt": prompt,
            "response_schema": schema.model_json_schema(),
        }
        return post_json(
            self.settings.llm_url,
            payload,
            headers=headers,
            timeout=self.settings.llm_timeout,
            session=self.session,
        )
