from __future__ import annotations

from typing import Any, Dict, List, Mapping

import pandas as pd

from bcb_poupanca.domain.poupanca.service import PoupancaService, parse_poupanca_params
from bcb_poupanca.domain.poupanca.validate import validate_poupanca_monthly, validate_poupanca_series
from bcb_poupanca.extractors.bcb_sgs_raw import BcbSgsRawExtractor
from bcb_poupanca.utils.calendar.dates import as_datetime
from bcb_poupanca.utils.io.http import HTTPConfig, RequestsTransport


def _make_service(records: List[Dict[str, Any]], params: Mapping[str, Any]) -> PoupancaService:
    service = PoupancaService(parse_poupanca_params(params))
    service.load_records(records)
    return service


def fetch_poupanca_records(params: Mapping[str, Any]) -> List[Dict[str, Any]]:
    cfg = parse_poupanca_params(params)
    http = RequestsTransport(HTTPConfig(timeout_sec=cfg.timeout_sec))
    return BcbSgsRawExtractor(http, cfg.sgs_config()).fetch_records()


def build_poupanca_series(records: List[Dict[str, Any]], params: Mapping[str, Any]) -> pd.DataFrame:
    return _make_service(records, params).store.to_frame()


def validate_poupanca_series_df(df: pd.DataFrame) -> pd.DataFrame:
    validate_poupanca_series(df)
    return df


def build_poupanca_monthly(records: List[Dict[str, Any]], params: Mapping[str, Any]) -> pd.DataFrame:
    service = _make_service(records, params)
    raw = service.period()
    acc = service.period(compounded=True)

    df = pd.DataFrame(
        {
            "ref_month": [e.timestamp_start for e in raw],
            "rate_percent": [e.rate_percent for e in raw],
            "accumulated": [e.rate_percent for e in acc],
        },
        columns=["ref_month", "rate_percent", "accumulated"],
    )
    validate_poupanca_monthly(df)
    return df


def build_poupanca_summary(records: List[Dict[str, Any]], params: Mapping[str, Any]) -> pd.DataFrame:
    """
    Resumo em formato longo (metric, value): média e acumulado dos últimos 12
    meses, último mês divulgado e as correções pedidas em params['corrections'].
    """
    service = _make_service(records, params)
    rows: List[Dict[str, Any]] = []

    last = service.last_12()
    if last:
        rows.append({"metric": "last_month", "ref_date": last[-1].timestamp_start, "value": last[-1].rate_percent})
        rows.append({"metric": "yearly_average", "ref_date": last[-1].timestamp_start, "value": service.yearly_average()})
        rows.append({"metric": "yearly_accumulated", "ref_date": last[-1].timestamp_start, "value": service.yearly_accumulated()})

    for i, c in enumerate(service.config.corrections):
        end = c.get("end")
        rows.append(
            {
                "metric": f"correction_{i}_{as_datetime(c['start']).date().isoformat()}",
                "ref_date": as_datetime(end) if end is not None else None,
                "value": service.correct(float(c["amount"]), c["start"], end),
            }
        )

    return pd.DataFrame(rows, columns=["metric", "ref_date", "value"])
