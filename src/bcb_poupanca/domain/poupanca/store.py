from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional

import pandas as pd

from bcb_poupanca.domain.poupanca.errors import NotLoadedError
from bcb_poupanca.domain.poupanca.models import SeriesEntry
from bcb_poupanca.domain.poupanca.parsing import parse_records
from bcb_poupanca.domain.poupanca.validate import DataQualityError

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["timestamp_start", "timestamp_end", "day_of_month", "rate_percent"]


class SeriesStore:
    """
    Guarda a série da poupança em memória.

    - load() substitui a série inteira (não faz merge).
    - Leituras devolvem cópias próprias; as entradas são imutáveis.
    """

    def __init__(self, on_conflict: str = "keep_last"):
        if on_conflict not in ("keep_last", "raise"):
            raise ValueError(f"on_conflict inválido: {on_conflict!r}. Use 'keep_last' ou 'raise'.")
        self.on_conflict = on_conflict
        self._series: Optional[List[SeriesEntry]] = None

    @property
    def is_loaded(self) -> bool:
        return self._series is not None

    def load(self, raw_records: Iterable[Mapping[str, Any]]) -> None:
        # Monta tudo antes de trocar: se o parse falhar a série anterior fica intacta
        entries = parse_records(raw_records)
        entries.sort(key=lambda e: e.timestamp_start)
        entries = self._dedup(entries)

        self._series = entries
        logger.info(
            "Poupança carregada: %s registros (%s a %s)",
            len(entries),
            entries[0].timestamp_start.date() if entries else None,
            entries[-1].timestamp_start.date() if entries else None,
        )

    def _dedup(self, entries: List[SeriesEntry]) -> List[SeriesEntry]:
        out: List[SeriesEntry] = []
        for e in entries:
            if out and out[-1].timestamp_start == e.timestamp_start:
                if self.on_conflict == "raise":
                    raise DataQualityError(f"Duplicate timestamp_start in poupança series: {e.timestamp_start.date()}")
                logger.warning("Registro duplicado em %s, mantendo o último", e.timestamp_start.date())
                out[-1] = e  # sort é estável: o último da entrada vence
                continue
            out.append(e)
        return out

    def all(self) -> List[SeriesEntry]:
        if self._series is None:
            raise NotLoadedError()
        return list(self._series)

    def to_frame(self) -> pd.DataFrame:
        rows = [e.to_dict() for e in self.all()]
        return pd.DataFrame(rows, columns=FRAME_COLUMNS)
