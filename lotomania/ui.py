import re
from datetime import datetime

def parse_lista(texto: str) -> list[int]:
    """Lê dezenas separadas por vírgula, espaço ou ponto e vírgula, sem repetir."""
    if not texto:
        return []
    tokens = re.split(r"[,\s;]+", texto.strip())
    out: list[int] = []
    seen: set[int] = set()
    for t in tokens:
        if t.isdigit():
            v = int(t)
            if v not in seen:
                out.append(v)
                seen.add(v)
    return out

def formatar_lista(dezenas) -> str:
    return ", ".join(f"{d:02d}" for d in dezenas) if dezenas else "-"

def formatar_timestamp(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime("%d/%m/%Y %H:%M")
