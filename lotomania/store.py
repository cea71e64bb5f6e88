from __future__ import annotations

import json
import logging
import os
import tempfile
import time
import uuid
from dataclasses import asdict
from pathlib import Path
from typing import Any, Optional, Union

from .errors import PersistenceError
from .models import GenerationCriteria, HistoryEntry, Template, TipoEvento

logger = logging.getLogger(__name__)

TIPOS_EVENTO = ("generation", "import", "export", "template_creation")


def _montar(cls, registro: Any):
    try:
        return cls(**registro)
    except TypeError as e:
        raise PersistenceError(f"Registro de {cls.__name__} inválido: {e}") from e


class JsonStore:
    """
    Armazena modelos e histórico de atividades de cada usuário em um único
    documento JSON: {"templates": [...], "history": [...]}.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _carregar(self) -> dict[str, list[dict[str, Any]]]:
        if not self.path.exists():
            return {"templates": [], "history": []}
        try:
            doc = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Erro ao ler {self.path}: {e}") from e
        if not isinstance(doc, dict):
            raise PersistenceError(f"Formato inválido em {self.path}: esperado um objeto JSON")
        doc.setdefault("templates", [])
        doc.setdefault("history", [])
        if not isinstance(doc["templates"], list) or not isinstance(doc["history"], list):
            raise PersistenceError(f"Formato inválido em {self.path}: templates e history devem ser listas")
        if not all(isinstance(r, dict) for r in (*doc["templates"], *doc["history"])):
            raise PersistenceError(f"Formato inválido em {self.path}: registros devem ser objetos JSON")
        return doc

    def _salvar(self, doc: dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(doc, f, ensure_ascii=False, indent=2)
            os.replace(tmp, self.path)
        except OSError as e:
            raise PersistenceError(f"Erro ao salvar {self.path}: {e}") from e

    # --------------------------
    # Modelos
    # --------------------------
    def salvar_template(
        self,
        owner: str,
        name: str,
        criteria: GenerationCriteria,
        description: Optional[str] = None,
    ) -> Template:
        if not name.strip():
            raise PersistenceError("O modelo precisa de um nome.")
        tpl = Template(
            id=uuid.uuid4().hex,
            owner=owner,
            name=name.strip(),
            criteria=criteria.to_dict(),
            created_at=time.time(),
            description=(description or None),
        )
        doc = self._carregar()
        doc["templates"].append(asdict(tpl))
        self._salvar(doc)
        logger.info("Modelo '%s' salvo para %s", tpl.name, owner)
        return tpl

    def listar_templates(self, owner: str) -> list[Template]:
        tpls = [_montar(Template, t) for t in self._carregar()["templates"] if t.get("owner") == owner]
        return sorted(tpls, key=lambda t: t.created_at, reverse=True)

    def excluir_template(self, owner: str, template_id: str) -> bool:
        doc = self._carregar()
        antes = len(doc["templates"])
        doc["templates"] = [
            t for t in doc["templates"] if not (t.get("owner") == owner and t.get("id") == template_id)
        ]
        if len(doc["templates"]) == antes:
            return False
        self._salvar(doc)
        logger.info("Modelo %s excluído para %s", template_id, owner)
        return True

    # --------------------------
    # Histórico
    # --------------------------
    def registrar_evento(self, owner: str, tipo: TipoEvento, details: Optional[dict[str, Any]] = None) -> HistoryEntry:
        if tipo not in TIPOS_EVENTO:
            raise PersistenceError(f"Tipo de evento desconhecido: {tipo}")
        ev = HistoryEntry(id=uuid.uuid4().hex, owner=owner, type=tipo, timestamp=time.time(), details=details or {})
        doc = self._carregar()
        doc["history"].append(asdict(ev))
        self._salvar(doc)
        return ev

    def listar_historico(self, owner: str, limit: Optional[int] = 50) -> list[HistoryEntry]:
        evs = [_montar(HistoryEntry, h) for h in self._carregar()["history"] if h.get("owner") == owner]
        evs.sort(key=lambda e: e.timestamp, reverse=True)
        return evs if limit is None else evs[:limit]
