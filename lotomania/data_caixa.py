from __future__ import annotations

import logging
from typing import Optional

import requests

from .config import URL_LOTOMANIA_DOWNLOAD
from .data_upload import parse_resultados
from .errors import ParseError
from .http_client import baixar_bytes
from .models import DrawRecord

logger = logging.getLogger(__name__)


def load_history_from_caixa(
    url: str = URL_LOTOMANIA_DOWNLOAD,
    session: Optional[requests.Session] = None,
) -> list[DrawRecord]:
    """
    Baixa o XLSX oficial da Lotomania e normaliza pelo mesmo parser do upload.
    A planilha da Caixa segue o layout Concurso, Data Sorteio, Bola1..Bola20.
    """
    conteudo = baixar_bytes(url, timeout=60, session=session)
    outcome = parse_resultados(conteudo, "lotomania_caixa.xlsx")
    if not outcome.records:
        raise ParseError("XLSX da Lotomania sem concursos válidos.")
    logger.info("Histórico da Caixa: %d concursos", outcome.valid_rows)
    return sorted(outcome.records, key=lambda r: r.contest_id, reverse=True)
