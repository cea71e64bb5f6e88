import numpy as np
import pytest

from lotomania.domain_lottery import (
    acertos,
    baixos_altos,
    formatar_aposta,
    gerar_aposta,
    gerar_apostas,
    pares_impares,
    validar_aposta,
    validar_criterios,
)
from lotomania.errors import ValidationError
from lotomania.models import DrawRecord, GenerationCriteria


def _valida(aposta):
    return len(aposta) == 50 and len(set(aposta)) == 50 and all(0 <= d <= 99 for d in aposta)


def test_aleatorio_gera_quantidade_pedida_de_apostas_validas():
    result = gerar_apostas(GenerationCriteria(mode="aleatorio", quantity=30), rng=np.random.default_rng(1))
    assert result.ok
    assert result.warning is None
    assert len(result.bets) == 30
    assert all(_valida(b) for b in result.bets)


def test_apostas_saem_em_ordem_crescente():
    result = gerar_apostas(GenerationCriteria(mode="aleatorio", quantity=5), rng=np.random.default_rng(2))
    for b in result.bets:
        assert list(b) == sorted(b)


def test_completar_fixas_contem_todas_as_fixas():
    fixas = (0, 7, 13, 42, 99, 50, 1)
    criteria = GenerationCriteria(mode="completar_fixas", quantity=20, manual_inclusion=fixas)
    result = gerar_apostas(criteria, rng=np.random.default_rng(3))
    assert len(result.bets) == 20
    for b in result.bets:
        assert _valida(b)
        assert set(fixas) <= set(b)


def test_excluir_dezenas_nao_usa_excluidas():
    excluidas = tuple(range(0, 100, 3))
    criteria = GenerationCriteria(mode="excluir_dezenas", quantity=20, manual_exclusion=excluidas)
    result = gerar_apostas(criteria, rng=np.random.default_rng(4))
    assert len(result.bets) == 20
    for b in result.bets:
        assert _valida(b)
        assert not set(b) & set(excluidas)


def test_excluir_exatamente_50_gera_o_complemento():
    excluidas = tuple(range(0, 100, 2))
    criteria = GenerationCriteria(mode="excluir_dezenas", quantity=2, manual_exclusion=excluidas)
    result = gerar_apostas(criteria, rng=np.random.default_rng(5))
    esperado = tuple(range(1, 100, 2))
    assert result.bets == [esperado, esperado]


def test_excluidas_ignoradas_fora_do_modo_excluir():
    aposta = gerar_aposta("aleatorio", dezenas_proibidas=tuple(range(50)), rng=np.random.default_rng(6))
    assert _valida(aposta)


def test_50_ou_mais_fixas_devolve_uma_aposta_com_aviso():
    fixas = tuple(range(99, 44, -1))  # 55 dezenas
    criteria = GenerationCriteria(mode="completar_fixas", quantity=10, manual_inclusion=fixas)
    result = gerar_apostas(criteria)
    assert result.ok
    assert result.warning
    assert result.bets == [tuple(sorted(fixas[:50]))]


def test_mais_de_50_excluidas_reporta_erro_sem_lancar():
    criteria = GenerationCriteria(mode="excluir_dezenas", quantity=1, manual_exclusion=tuple(range(51)))
    result = gerar_apostas(criteria)
    assert not result.ok
    assert result.bets == []
    assert "51" in result.error


@pytest.mark.parametrize("qtd", [0, 101, -3])
def test_quantidade_fora_do_intervalo(qtd):
    result = gerar_apostas(GenerationCriteria(mode="aleatorio", quantity=qtd))
    assert result.error
    with pytest.raises(ValidationError):
        validar_criterios(GenerationCriteria(mode="aleatorio", quantity=qtd))


def test_conflito_fixas_excluidas():
    criteria = GenerationCriteria(
        mode="completar_fixas", quantity=1, manual_inclusion=(1, 2, 3), manual_exclusion=(3, 4)
    )
    with pytest.raises(ValidationError, match="Conflito"):
        validar_criterios(criteria)


def test_dezena_fora_do_intervalo_e_repetida():
    with pytest.raises(ValidationError, match="fora do intervalo"):
        validar_criterios(GenerationCriteria(mode="completar_fixas", quantity=1, manual_inclusion=(100,)))
    with pytest.raises(ValidationError, match="repetidas"):
        validar_criterios(GenerationCriteria(mode="excluir_dezenas", quantity=1, manual_exclusion=(5, 5)))


def test_mesma_semente_mesmas_apostas():
    c = GenerationCriteria(mode="aleatorio", quantity=3)
    a = gerar_apostas(c, rng=np.random.default_rng(42)).bets
    b = gerar_apostas(c, rng=np.random.default_rng(42)).bets
    assert a == b


def test_validar_aposta():
    assert validar_aposta(list(range(50)))
    assert not validar_aposta(list(range(49)))
    assert not validar_aposta(list(range(49)) + [0])
    assert not validar_aposta(list(range(51, 101)))


def test_helpers_de_resumo():
    aposta = tuple(range(50))
    assert pares_impares(aposta) == (25, 25)
    assert baixos_altos(aposta) == (50, 0)
    assert formatar_aposta((10, 0, 5)) == "00 05 10"
    sorteio = DrawRecord(contest_id=1, date="01/01/2024", numbers=tuple(range(40, 60)))
    assert acertos(aposta, sorteio) == 10
