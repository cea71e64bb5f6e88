from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Optional

import numpy as np

from .config import LOTOMANIA, LotterySpec, Modo
from .errors import ValidationError
from .models import Bet, DrawRecord, GenerationCriteria, GenerationResult

logger = logging.getLogger(__name__)


def formatar_aposta(aposta: Iterable[int]) -> str:
    return " ".join(f"{d:02d}" for d in sorted(aposta))

def pares_impares(aposta: Sequence[int]) -> tuple[int, int]:
    pares = sum(1 for d in aposta if d % 2 == 0)
    return pares, len(aposta) - pares

def baixos_altos(aposta: Sequence[int], limite_baixo: int = LOTOMANIA.limite_baixo) -> tuple[int, int]:
    baixos = sum(1 for d in aposta if d <= limite_baixo)
    return baixos, len(aposta) - baixos

def acertos(aposta: Iterable[int], sorteio: DrawRecord) -> int:
    return len(set(aposta) & set(sorteio.numbers))


def validar_dezenas(lista: Sequence[int], nome: str, spec: LotterySpec = LOTOMANIA) -> None:
    if len(set(lista)) != len(lista):
        raise ValidationError(f"{nome}: há dezenas repetidas.")
    fora = [d for d in lista if d < spec.n_min_dezena or d > spec.n_max_dezena]
    if fora:
        raise ValidationError(
            f"{nome}: dezenas fora do intervalo {spec.n_min_dezena:02d}–{spec.n_max_dezena}: {fora}"
        )

def validar_aposta(aposta: Sequence[int], spec: LotterySpec = LOTOMANIA) -> bool:
    if len(aposta) != spec.n_dezenas_aposta or len(set(aposta)) != len(aposta):
        return False
    return all(isinstance(d, (int, np.integer)) and spec.n_min_dezena <= d <= spec.n_max_dezena for d in aposta)


def validar_criterios(criteria: GenerationCriteria, spec: LotterySpec = LOTOMANIA) -> None:
    if not spec.qtd_min <= criteria.quantity <= spec.qtd_max:
        raise ValidationError(f"A quantidade deve estar entre {spec.qtd_min} e {spec.qtd_max}.")

    validar_dezenas(criteria.manual_inclusion, "Fixas", spec)
    validar_dezenas(criteria.manual_exclusion, "Excluídas", spec)

    conflito = set(criteria.manual_inclusion) & set(criteria.manual_exclusion)
    if conflito:
        raise ValidationError(f"Conflito fixas/excluídas: {sorted(conflito)}")

    universo = spec.n_max_dezena - spec.n_min_dezena + 1
    if len(criteria.manual_exclusion) > universo - spec.n_dezenas_aposta:
        raise ValidationError(
            f"Excluir {len(criteria.manual_exclusion)} dezenas deixa menos de "
            f"{spec.n_dezenas_aposta} disponíveis para a aposta."
        )


def gerar_aposta(
    modo: Modo,
    dezenas_fixas: Sequence[int] = (),
    dezenas_proibidas: Sequence[int] = (),
    rng: Optional[np.random.Generator] = None,
    spec: LotterySpec = LOTOMANIA,
) -> Bet:
    """
    Sorteia dezenas uniformes em [0, 99] até completar a aposta.
    Pressupõe menos de 50 fixas e no máximo 50 proibidas (ver validar_criterios).
    """
    rng = rng if rng is not None else np.random.default_rng()
    aposta: set[int] = set(dezenas_fixas) if modo == "completar_fixas" else set()
    proibidas: set[int] = set(dezenas_proibidas) if modo == "excluir_dezenas" else set()

    while len(aposta) < spec.n_dezenas_aposta:
        d = int(rng.integers(spec.n_min_dezena, spec.n_max_dezena + 1))
        if d not in aposta and d not in proibidas:
            aposta.add(d)

    return tuple(sorted(aposta))


def gerar_apostas(
    criteria: GenerationCriteria,
    rng: Optional[np.random.Generator] = None,
    spec: LotterySpec = LOTOMANIA,
) -> GenerationResult:
    """
    Gera `criteria.quantity` apostas. Não lança exceção para entrada inválida:
    o motivo volta em `GenerationResult.error`.

    No modo completar_fixas com 50 ou mais fixas, devolve uma única aposta
    com as 50 primeiras fixas e um aviso.
    """
    try:
        validar_criterios(criteria, spec)
    except ValidationError as e:
        logger.info("Geração recusada: %s", e)
        return GenerationResult(bets=[], error=str(e))

    rng = rng if rng is not None else np.random.default_rng()

    if criteria.mode == "completar_fixas" and len(criteria.manual_inclusion) >= spec.n_dezenas_aposta:
        aposta = tuple(sorted(criteria.manual_inclusion[: spec.n_dezenas_aposta]))
        aviso = (
            f"Com {len(criteria.manual_inclusion)} dezenas fixas só é possível formar uma aposta; "
            f"usadas as {spec.n_dezenas_aposta} primeiras."
        )
        logger.warning(aviso)
        return GenerationResult(bets=[aposta], warning=aviso)

    apostas = [
        gerar_aposta(criteria.mode, criteria.manual_inclusion, criteria.manual_exclusion, rng, spec)
        for _ in range(criteria.quantity)
    ]
    logger.info("Geradas %d apostas (modo=%s)", len(apostas), criteria.mode)
    return GenerationResult(bets=apostas)
