from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pandas as pd
import pytest

from bcb_poupanca.utils.calendar.dates import (
    as_datetime,
    first_day_of_next_month,
    iter_month_intervals,
    start_of_day,
    start_of_month,
    to_millis,
)


def test_as_datetime_accepts_millis_iso_date_and_timestamp():
    assert as_datetime(1577836800000) == datetime(2020, 1, 1)
    assert as_datetime("2020-01-31") == datetime(2020, 1, 31)
    assert as_datetime(date(2020, 1, 31)) == datetime(2020, 1, 31)
    assert as_datetime(pd.Timestamp("2020-01-31 10:00")) == datetime(2020, 1, 31, 10)


BRT = timezone(timedelta(hours=-3))


def test_as_datetime_keeps_wall_clock_of_aware_datetimes():
    aware = datetime(2020, 1, 1, 1, 0, tzinfo=timezone.utc)
    assert as_datetime(aware) == datetime(2020, 1, 1, 1, 0)
    assert as_datetime(aware).tzinfo is None

    # 22h em Brasília já é dia 16 em UTC, mas o calendário é o local
    late = datetime(2020, 1, 15, 22, 0, tzinfo=BRT)
    assert as_datetime(late) == datetime(2020, 1, 15, 22, 0)
    assert start_of_day(late) == datetime(2020, 1, 15)
    assert start_of_day("2020-01-15T22:00:00-03:00") == datetime(2020, 1, 15)
    assert start_of_day(pd.Timestamp("2020-01-15 22:00", tz=BRT)) == datetime(2020, 1, 15)


def test_as_datetime_rejects_unknown_types():
    with pytest.raises(TypeError):
        as_datetime([2020, 1, 1])
    with pytest.raises(TypeError):
        as_datetime(True)


def test_to_millis_is_inverse_of_as_datetime():
    assert to_millis(datetime(2020, 1, 1)) == 1577836800000
    assert as_datetime(to_millis(datetime(2021, 6, 15))) == datetime(2021, 6, 15)


def test_start_helpers():
    assert start_of_day("2020-03-15T23:59:59") == datetime(2020, 3, 15)
    assert start_of_month("2020-03-15") == datetime(2020, 3, 1)
    assert first_day_of_next_month("2020-01-31") == datetime(2020, 2, 1)
    assert first_day_of_next_month("2020-12-30") == datetime(2021, 1, 1)


def test_month_intervals_clips_last_interval():
    out = list(iter_month_intervals(datetime(2020, 1, 15), datetime(2020, 3, 20)))
    assert out == [
        (datetime(2020, 1, 15), datetime(2020, 2, 15)),
        (datetime(2020, 2, 15), datetime(2020, 3, 15)),
        (datetime(2020, 3, 15), datetime(2020, 3, 20)),
    ]


def test_month_intervals_anchors_on_start_not_previous_boundary():
    # 31/jan + 1 mês cai em 29/fev (bissexto), mas o próximo volta para 31/mar
    out = list(iter_month_intervals(datetime(2020, 1, 31), datetime(2020, 4, 30)))
    assert [e for _, e in out] == [datetime(2020, 2, 29), datetime(2020, 3, 31), datetime(2020, 4, 30)]


def test_month_intervals_empty_when_end_not_after_start():
    assert list(iter_month_intervals(datetime(2020, 1, 1), datetime(2020, 1, 1))) == []
    assert list(iter_month_intervals(datetime(2020, 2, 1), datetime(2020, 1, 1))) == []
