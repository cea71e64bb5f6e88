from __future__ import annotations

import io

import pandas as pd
import pytest

from lotomania.models import DrawRecord

CABECALHO = ["Concurso", "Data Sorteio"] + [f"Bola{i}" for i in range(1, 21)]


def xlsx_bytes(rows: list[list], header: list[str] | None = CABECALHO) -> bytes:
    buf = io.BytesIO()
    df = pd.DataFrame(rows, columns=header) if header else pd.DataFrame(rows)
    df.to_excel(buf, index=False, header=header is not None, engine="openpyxl")
    return buf.getvalue()


@pytest.fixture
def make_xlsx():
    return xlsx_bytes


@pytest.fixture
def records_com_7_sem_3() -> list[DrawRecord]:
    # 7 em todos os concursos, 3 em nenhum; as demais dezenas aparecem uma vez
    pool = [n for n in range(100) if n not in (3, 7)]
    return [
        DrawRecord(contest_id=100 + i, date=f"0{i + 1}/01/2024", numbers=(7, *pool[i * 19 : (i + 1) * 19]))
        for i in range(5)
    ]
