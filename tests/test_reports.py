import io
import json
import zipfile
from datetime import datetime

import numpy as np

from lotomania.domain_lottery import gerar_apostas
from lotomania.models import GenerationCriteria
from lotomania.reports import (
    apostas_com_criterios_txt,
    apostas_to_csv_bytes,
    apostas_to_df,
    apostas_to_json_bytes,
    apostas_to_txt_bytes,
    make_zip_bytes,
)


def _apostas(n=4):
    return gerar_apostas(GenerationCriteria(mode="aleatorio", quantity=n), rng=np.random.default_rng(7)).bets


def test_csv_tem_cabecalho_e_uma_linha_por_aposta():
    apostas = _apostas(4)
    linhas = apostas_to_csv_bytes(apostas).decode("utf-8-sig").splitlines()
    assert len(linhas) == 5
    assert linhas[0] == "id," + ",".join(f"num{i}" for i in range(1, 51))
    for i, (linha, aposta) in enumerate(zip(linhas[1:], apostas), start=1):
        campos = linha.split(",")
        assert campos[0] == str(i)
        assert len(campos[1:]) == 50
        assert all(len(c) == 2 and c.isdigit() for c in campos[1:])
        assert [int(c) for c in campos[1:]] == list(aposta)


def test_txt_uma_aposta_por_linha():
    apostas = [tuple(range(50)), tuple(range(50, 100))]
    linhas = apostas_to_txt_bytes(apostas).decode().splitlines()
    assert linhas[0].startswith("00 01 02")
    assert linhas[1].endswith("98 99")
    assert all(len(l.split(" ")) == 50 for l in linhas)


def test_json_lista_de_id_e_numeros():
    apostas = _apostas(2)
    payload = json.loads(apostas_to_json_bytes(apostas))
    assert [p["id"] for p in payload] == [1, 2]
    assert payload[0]["numbers"] == list(apostas[0])


def test_txt_com_criterios():
    criteria = GenerationCriteria(mode="completar_fixas", quantity=1, manual_inclusion=(3, 7))
    out = apostas_com_criterios_txt([tuple(range(50))], criteria, generated_at=datetime(2024, 1, 2, 3, 4, 5)).decode()
    assert "# Modo: completar_fixas" in out
    assert "# Fixas: 03 07" in out
    assert "2024-01-02 03:04:05" in out
    assert out.rstrip().splitlines()[-1].startswith("00 01")


def test_df_com_resumo():
    df = apostas_to_df([tuple(range(50))], com_resumo=True)
    assert df.loc[0, "pares"] == 25
    assert df.loc[0, "baixos"] == 50


def test_zip():
    data = make_zip_bytes([("a.txt", b"1"), ("b.csv", b"2")])
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert sorted(zf.namelist()) == ["a.txt", "b.csv"]
        assert zf.read("b.csv") == b"2"
