from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from bcb_poupanca.domain.poupanca.accumulate import compound_index
from bcb_poupanca.domain.poupanca.errors import MissingRateError, NotLoadedError
from bcb_poupanca.domain.poupanca.store import SeriesStore
from bcb_poupanca.utils.calendar.dates import (
    DateLike,
    first_day_of_next_month,
    iter_month_intervals,
    start_of_day,
)

logger = logging.getLogger(__name__)


class CorrectionEngine:
    """
    Correção de um valor pela poupança, por datas de aniversário.

    Segue a metodologia da Calculadora do Cidadão (BCB):
    https://www3.bcb.gov.br/CALCIDADAO/publico/corrigirPelaPoupanca.do?method=corrigirPelaPoupanca

    Não acompanha aportes: serve para olhar a rentabilidade, não os rendimentos.
    """

    def __init__(self, store: SeriesStore, now: Callable[[], datetime] = datetime.now):
        self.store = store
        self._now = now

    def _normalize(self, start: DateLike, end: Optional[DateLike]) -> tuple[datetime, datetime]:
        s = start_of_day(start)
        e = start_of_day(end if end is not None else self._now())

        # Dias 29, 30 e 31 avançam para o dia 1º do mês seguinte
        if s.day > 28:
            s = first_day_of_next_month(s)
        return s, e

    def anniversaries(self, start: DateLike, end: Optional[DateLike] = None) -> List[datetime]:
        s, e = self._normalize(start, end)
        return [
            stop
            for _, stop in iter_month_intervals(s, e)
            if stop.day == s.day
        ]

    def _rates_by_end(self) -> Dict[datetime, float]:
        out: Dict[datetime, float] = {}
        for entry in self.store.all():
            out.setdefault(entry.timestamp_end, entry.rate_percent)
        return out

    def correct(self, amount: float, start: DateLike, end: Optional[DateLike] = None) -> float:
        if not self.store.is_loaded:
            raise NotLoadedError()

        nivers = self.anniversaries(start, end)

        # Ainda não completou o primeiro aniversário
        if not nivers:
            return amount

        by_end = self._rates_by_end()
        rates: List[float] = []
        for niver in nivers:
            if niver not in by_end:
                raise MissingRateError(niver)
            rates.append(by_end[niver])

        index = compound_index(rates)
        logger.debug(
            "Correção poupança: %s aniversários (%s a %s), índice=%s",
            len(nivers), nivers[0].date(), nivers[-1].date(), index,
        )
        return amount * index
