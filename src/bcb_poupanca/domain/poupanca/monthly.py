from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional

from bcb_poupanca.domain.poupanca.accumulate import accumulate
from bcb_poupanca.domain.poupanca.errors import EmptySeriesError
from bcb_poupanca.domain.poupanca.models import SeriesEntry
from bcb_poupanca.domain.poupanca.store import SeriesStore
from bcb_poupanca.utils.calendar.dates import DateLike, start_of_month

EARLIEST_DATE = datetime(2000, 1, 1)


class MonthlyView:
    """
    Leitura mensal da série: apenas os registros do dia 1º (valor divulgado).
    A leitura fica mensal, igual ao IPCA.
    """

    def __init__(
        self,
        store: SeriesStore,
        earliest_date: DateLike = EARLIEST_DATE,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.store = store
        self.earliest_date = start_of_month(earliest_date)
        self._now = now

    def monthly_snapshots(self) -> List[SeriesEntry]:
        return [e for e in self.store.all() if e.is_monthly]

    def month_of(self, month: int, year: int) -> Optional[float]:
        ref = datetime(year, month, 1)
        for e in self.monthly_snapshots():
            if e.timestamp_start == ref:
                return e.rate_percent
        return None

    def period(
        self,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        compounded: bool = False,
    ) -> List[SeriesEntry]:
        """
        Dados mensais de um período, limites inclusivos e normalizados para o 1º do mês.

        period(de, ate, True)[-1].rate_percent -> fator acumulado do período
        """
        s = start_of_month(start if start is not None else self.earliest_date)
        e = start_of_month(end if end is not None else self._now())

        data = [x for x in self.monthly_snapshots() if s <= x.timestamp_start <= e]
        return accumulate(data, "rate_percent") if compounded else data

    def last_12(self, compounded: bool = False) -> List[SeriesEntry]:
        # Com menos de 12 meses devolve o que houver
        data = self.monthly_snapshots()[-12:]
        return accumulate(data, "rate_percent") if compounded else data

    def yearly_average(self) -> float:
        # Divide sempre por 12, mesmo com menos meses carregados
        return sum(e.rate_percent for e in self.last_12()) / 12

    def yearly_accumulated(self) -> float:
        data = self.last_12(compounded=True)
        if not data:
            raise EmptySeriesError("Sem dados mensais da poupança para acumular os últimos 12 meses.")
        return data[-1].rate_percent
