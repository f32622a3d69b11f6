from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict


@dataclass(frozen=True)
class SeriesEntry:
    """
    Um registro da série 195 (poupança) já normalizado.

    A série é diária, mas cada dia carrega a rentabilidade do aniversário
    [timestamp_start, timestamp_end]. O dia 1º de cada mês é o valor mensal divulgado.
    """
    timestamp_start: datetime
    timestamp_end: datetime
    day_of_month: int
    rate_percent: float

    @property
    def is_monthly(self) -> bool:
        return self.day_of_month == 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp_start": self.timestamp_start,
            "timestamp_end": self.timestamp_end,
            "day_of_month": self.day_of_month,
            "rate_percent": self.rate_percent,
        }
