from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Union

import numpy as np
import pandas as pd

from .config import LOTOMANIA, LotterySpec
from .models import DrawRecord, FrequencyStats

Historico = Union[Sequence[DrawRecord], Iterable[int]]


def _todas_dezenas(historico: Historico) -> list[int]:
    todas: list[int] = []
    for item in historico:
        if isinstance(item, DrawRecord):
            todas.extend(item.numbers)
        else:
            todas.append(int(item))
    return todas


def frequencias(historico: Historico, spec: LotterySpec = LOTOMANIA) -> pd.DataFrame:
    universo = np.arange(spec.n_min_dezena, spec.n_max_dezena + 1)
    contagem = np.zeros(len(universo), dtype=int)
    for d in _todas_dezenas(historico):
        if spec.n_min_dezena <= d <= spec.n_max_dezena:
            contagem[d - spec.n_min_dezena] += 1
    return pd.DataFrame({"dezena": universo.astype(int), "frequencia": contagem})


def ranking_df(freq_df: pd.DataFrame) -> pd.DataFrame:
    # mergesort é estável: empates ficam em ordem crescente de dezena
    return freq_df.sort_values("frequencia", ascending=False, kind="mergesort").reset_index(drop=True)


def calcular_estatisticas(
    historico: Historico,
    top: int = LOTOMANIA.top_quentes_frias,
    spec: LotterySpec = LOTOMANIA,
) -> FrequencyStats:
    """
    Quentes = `top` primeiras do ranking por frequência; frias = `top` últimas.
    Empates mantêm a ordem crescente da dezena.
    """
    ordenado = ranking_df(frequencias(historico, spec))["dezena"].astype(int).tolist()
    return FrequencyStats(
        hot_numbers=tuple(ordenado[:top]),
        cold_numbers=tuple(ordenado[-top:]),
    )


def freq_top_df(freq_df: pd.DataFrame, top: int = LOTOMANIA.top_quentes_frias) -> pd.DataFrame:
    d = ranking_df(freq_df).head(top).copy()
    d["dezena"] = d["dezena"].map(lambda x: f"{x:02d}")
    return d.set_index("dezena")[["frequencia"]]
