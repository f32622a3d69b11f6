from __future__ import annotations

from datetime import date, datetime

import pytest
from dateutil.relativedelta import relativedelta

from bcb_poupanca.domain.poupanca.service import PoupancaService


def _fmt(d: date) -> str:
    return d.strftime("%d/%m/%Y")


def _record(d: date, valor: str) -> dict:
    # Na série 195 cada dia carrega o rendimento até o mesmo dia do mês seguinte
    return {"data": _fmt(d), "datafim": _fmt(d + relativedelta(months=1)), "valor": valor}


@pytest.fixture
def make_record():
    return _record


@pytest.fixture
def monthly_records():
    """15 meses (jan/2020 a mar/2021) com registros do dia 1º e um dia 15 intermediário."""
    out = []
    d = date(2020, 1, 1)
    for i in range(15):
        out.append(_record(d, f"{0.10 + i * 0.01:.4f}"))
        out.append(_record(d.replace(day=15), f"{0.50 + i * 0.01:.4f}"))
        d = d + relativedelta(months=1)
    return out


@pytest.fixture
def fixed_now():
    return lambda: datetime(2021, 3, 20, 15, 30)


@pytest.fixture
def service(monthly_records, fixed_now):
    s = PoupancaService(now=fixed_now)
    s.load_records(monthly_records)
    return s
