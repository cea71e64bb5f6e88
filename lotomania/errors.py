from __future__ import annotations


class LotomaniaError(Exception):
    """Base de todos os erros do app."""


class ValidationError(LotomaniaError, ValueError):
    """Entrada inválida (quantidade, dezenas, arquivo) detectada antes do processamento."""


class UploadTooLargeError(ValidationError):
    pass


class ParseError(LotomaniaError):
    """Arquivo ilegível como um todo. Linhas inválidas isoladas não geram este erro."""


class CollaboratorError(LotomaniaError):
    """Falha ao falar com um serviço externo (IA, download da Caixa)."""


class ResponseSchemaError(CollaboratorError):
    """O serviço respondeu, mas fora do formato esperado."""


class PersistenceError(LotomaniaError):
    pass
