from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Protocol

from bcb_poupanca.domain.poupanca.correction import CorrectionEngine
from bcb_poupanca.domain.poupanca.models import SeriesEntry
from bcb_poupanca.domain.poupanca.monthly import EARLIEST_DATE, MonthlyView
from bcb_poupanca.domain.poupanca.store import SeriesStore
from bcb_poupanca.extractors.bcb_sgs_raw import POUPANCA_SERIES_ID, SgsConfig
from bcb_poupanca.utils.calendar.dates import DateLike, as_datetime

logger = logging.getLogger(__name__)


class RecordLoader(Protocol):
    def fetch_records(self) -> List[Dict[str, Any]]: ...


@dataclass(frozen=True)
class PoupancaConfig:
    series_id: int = POUPANCA_SERIES_ID
    base_url: str = "https://api.bcb.gov.br/dados/serie"
    proxy_url: Optional[str] = None
    earliest_date: datetime = EARLIEST_DATE
    on_conflict: str = "keep_last"
    timeout_sec: int = 30
    corrections: List[Dict[str, Any]] = field(default_factory=list)

    def sgs_config(self) -> SgsConfig:
        return SgsConfig(series_id=self.series_id, base_url=self.base_url, proxy_url=self.proxy_url)


def parse_poupanca_params(params: Mapping[str, Any] | None) -> PoupancaConfig:
    """
    Converte o bloco params['poupanca'] (Kedro) em PoupancaConfig.

    Chaves ausentes ficam com o default; 'corrections' é uma lista de
    {'amount', 'start', 'end'?} usada no resumo.
    """
    p = dict(params or {})
    defaults = PoupancaConfig()

    on_conflict = str(p.get("on_conflict", defaults.on_conflict)).strip()
    if on_conflict not in ("keep_last", "raise"):
        raise ValueError(f"on_conflict inválido: {on_conflict!r}. Use 'keep_last' ou 'raise'.")

    corrections = p.get("corrections") or []
    if not isinstance(corrections, list):
        raise ValueError(f"corrections must be a list, got {type(corrections)}")
    for i, c in enumerate(corrections):
        if not isinstance(c, Mapping) or "amount" not in c or "start" not in c:
            raise ValueError(f"corrections[{i}] must be a mapping with 'amount' and 'start'")

    proxy_url = p.get("proxy_url") or None

    return PoupancaConfig(
        series_id=int(p.get("series_id", defaults.series_id)),
        base_url=str(p.get("base_url", defaults.base_url)).strip(),
        proxy_url=str(proxy_url).strip() if proxy_url else None,
        earliest_date=as_datetime(p.get("earliest_date", defaults.earliest_date)),
        on_conflict=on_conflict,
        timeout_sec=int(p.get("timeout_sec", defaults.timeout_sec)),
        corrections=[dict(c) for c in corrections],
    )


class PoupancaService:
    """
    Ponto único de acesso à poupança: uma SeriesStore compartilhada pela
    leitura mensal e pela correção.
    """

    def __init__(self, config: Optional[PoupancaConfig] = None, now: Callable[[], datetime] = datetime.now):
        self.config = config or PoupancaConfig()
        self.store = SeriesStore(on_conflict=self.config.on_conflict)
        self.monthly = MonthlyView(self.store, earliest_date=self.config.earliest_date, now=now)
        self.correction = CorrectionEngine(self.store, now=now)

    def load(self, loader: RecordLoader) -> None:
        self.load_records(loader.fetch_records())

    def load_records(self, records: Iterable[Mapping[str, Any]]) -> None:
        self.store.load(records)

    # --- consultas ---

    def all(self) -> List[SeriesEntry]:
        return self.store.all()

    def monthly_snapshots(self) -> List[SeriesEntry]:
        return self.monthly.monthly_snapshots()

    def month_of(self, month: int, year: int) -> Optional[float]:
        return self.monthly.month_of(month, year)

    def period(
        self,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        compounded: bool = False,
    ) -> List[SeriesEntry]:
        return self.monthly.period(start, end, compounded)

    def last_12(self, compounded: bool = False) -> List[SeriesEntry]:
        return self.monthly.last_12(compounded)

    def yearly_average(self) -> float:
        return self.monthly.yearly_average()

    def yearly_accumulated(self) -> float:
        return self.monthly.yearly_accumulated()

    def correct(self, amount: float, start: DateLike, end: Optional[DateLike] = None) -> float:
        return self.correction.correct(amount, start, end)
