from __future__ import annotations

from datetime import datetime


class PoupancaError(RuntimeError):
    pass


class NotLoadedError(PoupancaError):
    """Consulta feita antes do primeiro load() bem-sucedido."""

    def __init__(self, message: str = "Série da poupança ainda não foi carregada (chame load() antes)."):
        super().__init__(message)


class ParseError(PoupancaError, ValueError):
    """Data ou número malformado em um registro bruto."""

    def __init__(self, field: str, value: object, index: int | None = None):
        self.field = field
        self.value = value
        self.index = index
        where = f" (registro {index})" if index is not None else ""
        super().__init__(f"Campo {field!r} inválido{where}: {value!r}")


class EmptySeriesError(PoupancaError):
    pass


class MissingRateError(PoupancaError):
    """Aniversário sem taxa correspondente (nenhum registro com datafim igual)."""

    def __init__(self, anniversary: datetime):
        self.anniversary = anniversary
        super().__init__(f"Sem taxa da poupança para o aniversário {anniversary.date().isoformat()}")


class ResponseShapeError(PoupancaError, ValueError):
    pass
