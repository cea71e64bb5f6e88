from __future__ import annotations

import io
import json
import logging
import zipfile
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional

import pandas as pd

from .config import (
    EXTENSOES_ACEITAS,
    EXTENSOES_PLANILHA,
    LOTOMANIA,
    MAX_UPLOAD_BYTES,
    ROTULO_CABECALHO,
    LotterySpec,
)
from .errors import ParseError, UploadTooLargeError, ValidationError
from .models import DrawRecord, ParseOutcome

logger = logging.getLogger(__name__)

SAMPLE_RESULTS_PATH = Path(__file__).parent / "data" / "sample_results.json"

SEPARADORES = (";", "\t", ",", r"\s+")

# a planilha da Caixa tem bem menos colunas; linhas mais largas são descartadas
LARGURA_MAX = 128


def validar_upload(filename: str, size: int) -> None:
    ext = Path(filename).suffix.lower()
    if ext not in EXTENSOES_ACEITAS:
        raise ValidationError(
            f"Formato não suportado ({ext or 'sem extensão'}). Use: {', '.join(EXTENSOES_ACEITAS)}"
        )
    if size > MAX_UPLOAD_BYTES:
        raise UploadTooLargeError(
            f"Arquivo com {size / 1024 / 1024:.1f} MB excede o limite de {MAX_UPLOAD_BYTES // 1024 // 1024} MB."
        )


def _decodificar(conteudo: bytes) -> str:
    try:
        return conteudo.decode("utf-8-sig")
    except UnicodeDecodeError:
        # planilhas exportadas no Windows costumam vir em latin-1
        return conteudo.decode("latin-1")


def _ler_texto(conteudo: bytes, spec: LotterySpec) -> pd.DataFrame:
    """
    Tenta cada separador e fica com o primeiro que produz alguma linha com
    concurso, data e as dezenas. Sem nenhum assim, devolve a primeira leitura
    bem-sucedida (todas as linhas serão contadas como inválidas).
    """
    texto = _decodificar(conteudo)
    minimo = 2 + spec.n_dezenas_sorteio
    primeira: Optional[pd.DataFrame] = None
    for sep in SEPARADORES:
        try:
            d = pd.read_csv(
                io.StringIO(texto),
                header=None,
                names=range(LARGURA_MAX),
                sep=sep,
                engine="python",
                dtype=object,
                skip_blank_lines=True,
                on_bad_lines="skip",
            )
        except ValueError:
            continue
        if (d.notna().sum(axis=1) >= minimo).any():
            return d
        if primeira is None:
            primeira = d
    if primeira is None:
        raise ParseError("Nenhum separador conhecido (; tab , espaço) conseguiu ler o arquivo.")
    return primeira


def _ler_tabela(conteudo: bytes, filename: str, spec: LotterySpec) -> pd.DataFrame:
    ext = Path(filename).suffix.lower()
    try:
        if ext in EXTENSOES_PLANILHA:
            return pd.read_excel(io.BytesIO(conteudo), header=None, dtype=object, engine="openpyxl")
        return _ler_texto(conteudo, spec)
    except (ValueError, KeyError, OSError, zipfile.BadZipFile) as e:
        raise ParseError(f"Não foi possível ler '{filename}': {e}") from e


def _numerico(col: pd.Series) -> pd.Series:
    limpa = col.map(lambda v: v.strip() if isinstance(v, str) else v)
    return pd.to_numeric(limpa, errors="coerce")


def _formatar_data(v: Any) -> str:
    if v is None or (not isinstance(v, str) and pd.isna(v)):
        return ""
    if isinstance(v, (datetime, date)):
        return v.strftime("%d/%m/%Y")
    return str(v).strip()


def _registros_validos(linhas: pd.DataFrame, spec: LotterySpec) -> list[DrawRecord]:
    n = spec.n_dezenas_sorteio
    largura = 2 + n
    if linhas.empty or linhas.shape[1] < largura:
        return []

    concursos = _numerico(linhas.iloc[:, 0])
    dezenas = linhas.iloc[:, 2:largura].apply(_numerico)

    validas = (
        concursos.notna()
        & (concursos % 1 == 0)
        & dezenas.notna().all(axis=1)
        & (dezenas % 1 == 0).all(axis=1)
        & dezenas.apply(lambda c: c.between(spec.n_min_dezena, spec.n_max_dezena)).all(axis=1)
        & (dezenas.nunique(axis=1) == n)
    )

    return [
        DrawRecord(
            contest_id=int(concursos.loc[i]),
            date=_formatar_data(linhas.loc[i].iloc[1]),
            numbers=tuple(int(d) for d in dezenas.loc[i]),
        )
        for i in linhas.index[validas]
    ]


def _indice_inicio(df: pd.DataFrame) -> int:
    for i, row in enumerate(df.itertuples(index=False)):
        if any(isinstance(c, str) and c.strip().lower() == ROTULO_CABECALHO for c in row):
            return i + 1
    return 0


def parse_resultados(conteudo: bytes, filename: str, spec: LotterySpec = LOTOMANIA) -> ParseOutcome:
    """
    Converte o arquivo enviado em DrawRecord.

    Layout esperado: concurso, data e as 20 dezenas sorteadas, com um cabeçalho
    opcional (linha que contém "Concurso"). Linhas fora do formato são
    descartadas e só aparecem na contagem de inválidas.
    """
    if not conteudo or not conteudo.strip():
        logger.info("Arquivo '%s' vazio", filename)
        return ParseOutcome(records=[], total_rows=0, invalid_rows=0)

    df = _ler_tabela(conteudo, filename, spec)
    if df.empty:
        return ParseOutcome(records=[], total_rows=0, invalid_rows=0)

    linhas = df.iloc[_indice_inicio(df):]
    linhas = linhas[~linhas.isna().all(axis=1)]
    records = _registros_validos(linhas, spec)

    total = len(linhas)
    invalidas = total - len(records)
    logger.info("'%s': %d linhas válidas de %d", filename, len(records), total)
    if invalidas:
        logger.warning("'%s': %d linhas descartadas por formato inválido", filename, invalidas)
    return ParseOutcome(records=records, total_rows=total, invalid_rows=invalidas)


def records_to_df(records: list[DrawRecord], spec: LotterySpec = LOTOMANIA) -> pd.DataFrame:
    dezenas_cols = [f"d{i}" for i in range(1, spec.n_dezenas_sorteio + 1)]
    if not records:
        return pd.DataFrame(columns=["concurso", "data", *dezenas_cols])
    rows = [
        {"concurso": r.contest_id, "data": r.date, **dict(zip(dezenas_cols, r.numbers))}
        for r in records
    ]
    return pd.DataFrame(rows, columns=["concurso", "data", *dezenas_cols])


def load_sample_results(path: Path = SAMPLE_RESULTS_PATH) -> list[DrawRecord]:
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ParseError(f"Falha ao ler resultados de exemplo em {path}: {e}") from e
    records = [
        DrawRecord(contest_id=int(r["concurso"]), date=str(r["data"]), numbers=tuple(int(d) for d in r["numeros"]))
        for r in payload.get("results", [])
    ]
    return sorted(records, key=lambda r: r.contest_id, reverse=True)


def anos_disponiveis(records: list[DrawRecord]) -> list[str]:
    return sorted({r.ano for r in records if r.ano}, reverse=True)


def filtrar_por_ano(records: list[DrawRecord], ano: Optional[str]) -> list[DrawRecord]:
    if not ano or ano == "Todos":
        return list(records)
    return [r for r in records if r.ano == ano]
