from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Optional

from .config import Estrategia, Modo

Bet = tuple[int, ...]

TipoEvento = Literal["generation", "import", "export", "template_creation"]

@dataclass(frozen=True)
class DrawRecord:
    contest_id: int
    date: str
    numbers: tuple[int, ...]

    @property
    def ano(self) -> str:
        return self.date.split("/")[-1] if "/" in self.date else self.date[:4]

@dataclass(frozen=True)
class FrequencyStats:
    hot_numbers: tuple[int, ...]
    cold_numbers: tuple[int, ...]

@dataclass(frozen=True)
class GenerationCriteria:
    mode: Modo
    quantity: int
    manual_inclusion: tuple[int, ...] = ()
    manual_exclusion: tuple[int, ...] = ()
    strategy: Optional[Estrategia] = None

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        d["manual_inclusion"] = list(self.manual_inclusion)
        d["manual_exclusion"] = list(self.manual_exclusion)
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> "GenerationCriteria":
        return cls(
            mode=d.get("mode", "aleatorio"),
            quantity=int(d.get("quantity", 1)),
            manual_inclusion=tuple(int(x) for x in d.get("manual_inclusion") or ()),
            manual_exclusion=tuple(int(x) for x in d.get("manual_exclusion") or ()),
            strategy=d.get("strategy"),
        )

@dataclass(frozen=True)
class GenerationResult:
    bets: list[Bet]
    warning: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

@dataclass(frozen=True)
class ParseOutcome:
    records: list[DrawRecord]
    total_rows: int
    invalid_rows: int

    @property
    def valid_rows(self) -> int:
        return len(self.records)

@dataclass(frozen=True)
class Template:
    id: str
    owner: str
    name: str
    criteria: dict[str, Any]
    created_at: float
    description: Optional[str] = None

@dataclass(frozen=True)
class HistoryEntry:
    id: str
    owner: str
    type: TipoEvento
    timestamp: float
    details: dict[str, Any] = field(default_factory=dict)
