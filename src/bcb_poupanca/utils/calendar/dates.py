from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Tuple, Union

from dateutil.relativedelta import relativedelta

DateLike = Union[datetime, date, str, int, float]

_EPOCH = datetime(1970, 1, 1)


def as_datetime(value: DateLike) -> datetime:
    """
    Converte qualquer representação de data aceita na fronteira pública para
    um datetime ingênuo (sem tz), em semântica de calendário.

    Aceita:
        - datetime / pandas.Timestamp (com tz vale a data do relógio local; o tz é descartado)
        - date
        - str ISO ('2020-01-31' ou '2020-01-31T10:00:00')
        - int/float em milissegundos desde a época (calendário UTC)
    """
    if isinstance(value, bool):
        raise TypeError(f"Data inválida: {value!r}")

    if isinstance(value, datetime):
        return datetime(value.year, value.month, value.day, value.hour, value.minute, value.second, value.microsecond)

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, (int, float)):
        return _EPOCH + timedelta(milliseconds=value)

    if isinstance(value, str):
        return as_datetime(datetime.fromisoformat(value.strip()))

    raise TypeError(f"Tipo de data não suportado: {type(value)}")


def start_of_day(value: DateLike) -> datetime:
    dt = as_datetime(value)
    return datetime(dt.year, dt.month, dt.day)


def start_of_month(value: DateLike) -> datetime:
    """Normaliza para o primeiro instante do mês (evita ambiguidade)."""
    dt = as_datetime(value)
    return datetime(dt.year, dt.month, 1)


def first_day_of_next_month(value: DateLike) -> datetime:
    return start_of_month(value) + relativedelta(months=1)


def to_millis(value: DateLike) -> int:
    """Inverso de as_datetime para números: ms desde a época, calendário UTC."""
    dt = as_datetime(value)
    return calendar.timegm(dt.timetuple()) * 1000 + dt.microsecond // 1000


def iter_month_intervals(start: DateLike, end: DateLike) -> Iterator[Tuple[datetime, datetime]]:
    """
    Divide o intervalo semiaberto [start, end) em janelas de 1 mês.

    Cada fronteira é ancorada em start + n meses (relativedelta cuida de
    meses de 28/29/30/31 dias), e a última janela é cortada em end.
    Se end <= start não há janelas.
    """
    s = as_datetime(start)
    e = as_datetime(end)

    cur = s
    n = 1
    while cur < e:
        nxt = s + relativedelta(months=n)
        if nxt > e:
            nxt = e
        yield cur, nxt
        cur = nxt
        n += 1
