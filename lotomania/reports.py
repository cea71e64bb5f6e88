from __future__ import annotations

import io
import json
import zipfile
from collections.abc import Sequence
from datetime import datetime
from typing import Optional

import pandas as pd

from .config import LOTOMANIA
from .domain_lottery import baixos_altos, pares_impares
from .models import Bet, GenerationCriteria


def make_zip_bytes(files: list[tuple[str, bytes]]) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for name, data in files:
            zf.writestr(name, data)
    return buf.getvalue()


def apostas_to_df(apostas: Sequence[Bet], com_resumo: bool = False) -> pd.DataFrame:
    num_cols = [f"num{i}" for i in range(1, LOTOMANIA.n_dezenas_aposta + 1)]
    rows = []
    for i, aposta in enumerate(apostas, start=1):
        r: dict[str, object] = {"id": i}
        r.update({c: f"{d:02d}" for c, d in zip(num_cols, aposta)})
        if com_resumo:
            pares, impares = pares_impares(aposta)
            baixos, altos = baixos_altos(aposta)
            r.update({"pares": pares, "impares": impares, "baixos": baixos, "altos": altos})
        rows.append(r)

    cols = ["id", *num_cols]
    if com_resumo:
        cols += ["pares", "impares", "baixos", "altos"]
    return pd.DataFrame(rows, columns=cols)


def apostas_to_csv_bytes(apostas: Sequence[Bet]) -> bytes:
    # UTF-8 com BOM (mais “Excel-friendly”)
    return apostas_to_df(apostas).to_csv(index=False, lineterminator="\n").encode("utf-8-sig")


def apostas_to_txt_bytes(apostas: Sequence[Bet]) -> bytes:
    linhas = [" ".join(f"{d:02d}" for d in aposta) for aposta in apostas]
    return ("\n".join(linhas) + ("\n" if linhas else "")).encode("utf-8")


def apostas_to_json_bytes(apostas: Sequence[Bet]) -> bytes:
    payload = [{"id": i, "numbers": list(aposta)} for i, aposta in enumerate(apostas, start=1)]
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def apostas_com_criterios_txt(
    apostas: Sequence[Bet],
    criteria: GenerationCriteria,
    generated_at: Optional[datetime] = None,
) -> bytes:
    ts = generated_at or datetime.now()
    c = criteria.to_dict()
    out = [
        f"# Lotomania - {len(apostas)} apostas",
        f"# Gerado em {ts.isoformat(sep=' ', timespec='seconds')}",
        f"# Modo: {c['mode']}",
        f"# Quantidade: {c['quantity']}",
    ]
    if c["manual_inclusion"]:
        out.append("# Fixas: " + " ".join(f"{d:02d}" for d in c["manual_inclusion"]))
    if c["manual_exclusion"]:
        out.append("# Excluídas: " + " ".join(f"{d:02d}" for d in c["manual_exclusion"]))
    if c["strategy"]:
        out.append(f"# Estratégia: {c['strategy']}")
    out.append("")
    return "\n".join(out).encode("utf-8") + apostas_to_txt_bytes(apostas)
