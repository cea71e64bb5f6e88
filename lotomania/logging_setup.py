from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configurado = False


def configure_logging(level: str = "INFO") -> None:
    """
    Configura o logging raiz uma única vez por processo.
    O Streamlit reexecuta o script a cada interação, então chamadas
    repetidas apenas ajustam o nível.
    """
    global _configurado
    nivel = getattr(logging, level.upper(), logging.INFO)
    if not _configurado:
        logging.basicConfig(format=LOG_FORMAT, level=nivel)
        _configurado = True
    logging.getLogger("lotomania").setLevel(nivel)
