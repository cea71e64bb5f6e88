import pytest
import requests

from lotomania.config import Settings
from lotomania.errors import CollaboratorError, ResponseSchemaError
from lotomania.llm_client import (
    AnalyzeImportedDataRequest,
    BetSuggester,
    HttpBetSuggester,
    StatsPayload,
    SuggestBetsRequest,
    SuggestCriteriaRequest,
    SuggestionsResponse,
    validar_sugestoes,
)
from lotomania.models import FrequencyStats, GenerationCriteria

STATS = FrequencyStats(hot_numbers=tuple(range(20)), cold_numbers=tuple(range(80, 100)))


class FakeSuggester(BetSuggester):
    def __init__(self, resposta):
        self.resposta = resposta
        self.prompts = []

    def _completar(self, prompt, schema):
        self.prompts.append(prompt)
        return self.resposta


def _req(**kw):
    criteria = GenerationCriteria(mode="aleatorio", quantity=2, strategy="hot", **kw)
    return SuggestBetsRequest.from_criteria(STATS, criteria)


def test_sugestoes_validas_voltam_ordenadas():
    boa = list(range(99, 49, -1))
    fake = FakeSuggester({"suggestions": [boa, list(range(50))], "analysis": "ok"})
    resp = fake.suggest_bets(_req())
    assert resp.suggestions == [list(range(50, 100)), list(range(50))]
    assert resp.analysis == "ok"
    assert "Estratégia \"hot\"" in fake.prompts[0]


def test_sugestoes_com_tamanho_errado_sao_descartadas():
    fake = FakeSuggester({"suggestions": [list(range(49)), list(range(50)), list(range(10)) * 5], "analysis": ""})
    resp = fake.suggest_bets(_req())
    assert resp.suggestions == [list(range(50))]


def test_inclusao_e_exclusao_respeitadas():
    resp = SuggestionsResponse(suggestions=[list(range(50)), list(range(50, 100))], analysis="")
    filtrado = validar_sugestoes(resp, incluir=[60], excluir=[0])
    assert filtrado.suggestions == [list(range(50, 100))]


def test_nenhuma_sugestao_valida_falha():
    fake = FakeSuggester({"suggestions": [[1, 2, 3]], "analysis": "x"})
    with pytest.raises(ResponseSchemaError):
        fake.suggest_bets(_req())


def test_resposta_fora_do_schema():
    fake = FakeSuggester({"apostas": []})
    with pytest.raises(ResponseSchemaError):
        fake.suggest_bets(_req())


def test_resposta_texto_json_e_aceita():
    fake = FakeSuggester('{"suggested_criteria": "equilibre pares e ímpares"}')
    assert fake.suggest_criteria(SuggestCriteriaRequest(user_query="algo")).suggested_criteria.startswith("equilibre")


def test_resposta_vazia_e_erro_do_colaborador():
    fake = FakeSuggester(None)
    with pytest.raises(CollaboratorError) as exc:
        fake.analyze_imported_data(AnalyzeImportedDataRequest(stats=StatsPayload.from_stats(STATS), number_of_bets=1))
    assert not isinstance(exc.value, ResponseSchemaError)


def test_prompt_lista_inclusoes():
    fake = FakeSuggester({"suggestions": [list(range(50))], "analysis": ""})
    fake.suggest_bets(_req(manual_inclusion=(1, 2)))
    assert "DEVEM estar em todas as apostas: 01, 02" in fake.prompts[0]


class FakeResponse:
    def __init__(self, payload=None, status=200, content=b"{}"):
        self.payload = payload
        self.status_code = status
        self.content = content

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} erro")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, response=None, exc=None):
        self.response = response
        self.exc = exc
        self.calls = []

    def post(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.exc:
            raise self.exc
        return self.response


def _settings(url="https://ia.example/gerar"):
    return Settings(
        llm_url=url,
        llm_api_key="segredo",
        llm_model="modelo-x",
        llm_timeout=30.0,
        store_path="unused.json",
        log_level="INFO",
    )


def test_http_suggester_envia_prompt_e_schema():
    session = FakeSession(FakeResponse({"suggestions": [list(range(50))], "analysis": "a"}))
    resp = HttpBetSuggester(_settings(), session=session).suggest_bets(_req())
    assert resp.suggestions == [list(range(50))]
    call = session.calls[0]
    assert call["url"] == "https://ia.example/gerar"
    assert call["timeout"] == 30.0
    assert call["headers"]["Authorization"] == "Bearer segredo"
    assert call["json"]["model"] == "modelo-x"
    assert "suggestions" in call["json"]["response_schema"]["properties"]


def test_http_suggester_erro_de_rede():
    session = FakeSession(exc=requests.ConnectionError("sem rede"))
    with pytest.raises(CollaboratorError):
        HttpBetSuggester(_settings(), session=session).suggest_bets(_req())


def test_http_suggester_status_de_erro():
    session = FakeSession(FakeResponse(status=503))
    with pytest.raises(CollaboratorError):
        HttpBetSuggester(_settings(), session=session).suggest_bets(_req())


def test_http_suggester_sem_url_configurada():
    with pytest.raises(CollaboratorError):
        HttpBetSuggester(_settings(url=None))
