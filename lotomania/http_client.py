from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Final, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .errors import CollaboratorError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS: Final[dict[str, str]] = {
    # Ajuda a evitar bloqueio/403 no portal da Caixa
    "User-Agent": "Mozilla/5.0 (compatible; LotomaniaHelper/1.0)",
    "Accept": "*/*",
}


@lru_cache(maxsize=1)
def get_session() -> requests.Session:
    s = requests.Session()
    retry = Retry(
        total=3,
        backoff_factor=0.8,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=("GET",),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update(DEFAULT_HEADERS)
    return s


@lru_cache(maxsize=1)
def get_post_session() -> requests.Session:
    # a chamada à IA não é idempotente: nenhuma nova tentativa, nem em erro de conexão
    s = requests.Session()
    adapter = HTTPAdapter(max_retries=0)
    s.mount("https://", adapter)
    s.mount("http://", adapter)
    s.headers.update(DEFAULT_HEADERS)
    return s


def baixar_bytes(url: str, timeout: float = 60, session: Optional[requests.Session] = None) -> bytes:
    s = session or get_session()
    try:
        r = s.get(url, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise CollaboratorError(f"Falha ao baixar {url}: {e}") from e
    logger.info("Baixados %d bytes de %s", len(r.content), url)
    return r.content


def post_json(
    url: str,
    payload: dict[str, Any],
    *,
    headers: Optional[dict[str, str]] = None,
    timeout: float = 120,
    session: Optional[requests.Session] = None,
) -> Any:
    s = session or get_post_session()
    try:
        r = s.post(url, json=payload, headers=headers, timeout=timeout)
        r.raise_for_status()
    except requests.RequestException as e:
        raise CollaboratorError(f"Falha na chamada ao serviço de IA: {e}") from e
    if not r.content:
        raise CollaboratorError("O serviço de IA não retornou uma resposta. Tente novamente.")
    try:
        return r.json()
    except ValueError as e:
        raise CollaboratorError(f"Resposta do serviço de IA não é JSON: {e}") from e
