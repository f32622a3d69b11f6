from __future__ import annotations

import math
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping, Optional

from bcb_poupanca.domain.poupanca.errors import ParseError
from bcb_poupanca.domain.poupanca.models import SeriesEntry


def _parse_ptbr_date(field: str, s: Any, index: Optional[int] = None) -> datetime:
    try:
        return datetime.strptime(str(s).strip(), "%d/%m/%Y")
    except (TypeError, ValueError) as exc:
        raise ParseError(field, s, index) from exc


def _parse_rate(s: Any, index: Optional[int] = None) -> float:
    if s is None or str(s).strip() == "":
        raise ParseError("valor", s, index)
    try:
        # SGS vem com ponto decimal
        value = Decimal(str(s).strip())
    except InvalidOperation as exc:
        raise ParseError("valor", s, index) from exc

    out = float(value)
    if not math.isfinite(out):
        raise ParseError("valor", s, index)
    return out


def parse_record(record: Mapping[str, Any], index: Optional[int] = None) -> SeriesEntry:
    """Converte um registro bruto {'data', 'datafim', 'valor'} em SeriesEntry."""
    for field in ("data", "datafim", "valor"):
        if field not in record:
            raise ParseError(field, None, index)

    start = _parse_ptbr_date("data", record["data"], index)
    end = _parse_ptbr_date("datafim", record["datafim"], index)

    return SeriesEntry(
        timestamp_start=start,
        timestamp_end=end,
        day_of_month=start.day,
        rate_percent=_parse_rate(record["valor"], index),
    )


def parse_records(records: Iterable[Mapping[str, Any]]) -> List[SeriesEntry]:
    return [parse_record(r, i) for i, r in enumerate(records)]
