from __future__ import annotations

from datetime import date, datetime

import pytest

from bcb_poupanca.domain.poupanca.errors import NotLoadedError, ParseError
from bcb_poupanca.domain.poupanca.parsing import parse_record
from bcb_poupanca.domain.poupanca.store import FRAME_COLUMNS, SeriesStore
from bcb_poupanca.domain.poupanca.validate import DataQualityError, validate_poupanca_series


# ---------- parsing ----------
def test_parse_record_reverses_ptbr_dates_and_reads_rate():
    e = parse_record({"data": "15/01/2020", "datafim": "15/02/2020", "valor": "0.2871"})

    assert e.timestamp_start == datetime(2020, 1, 15)
    assert e.timestamp_end == datetime(2020, 2, 15)
    assert e.day_of_month == 15
    assert e.rate_percent == 0.2871
    assert not e.is_monthly


@pytest.mark.parametrize(
    "record, field",
    [
        ({"data": "31/02/2020", "datafim": "31/03/2020", "valor": "0.1"}, "data"),
        ({"data": "2020-01-01", "datafim": "01/02/2020", "valor": "0.1"}, "data"),
        ({"data": "01/01/2020", "datafim": "", "valor": "0.1"}, "datafim"),
        ({"data": "01/01/2020", "datafim": "01/02/2020", "valor": "0,5"}, "valor"),
        ({"data": "01/01/2020", "datafim": "01/02/2020", "valor": "abc"}, "valor"),
        ({"data": "01/01/2020", "datafim": "01/02/2020", "valor": "NaN"}, "valor"),
        ({"data": "01/01/2020", "datafim": "01/02/2020", "valor": None}, "valor"),
        ({"data": "01/01/2020", "valor": "0.1"}, "datafim"),
    ],
)
def test_parse_record_malformed_raises(record, field):
    with pytest.raises(ParseError) as exc:
        parse_record(record, index=3)
    assert exc.value.field == field
    assert exc.value.index == 3


# ---------- store ----------
def test_query_before_load_raises():
    store = SeriesStore()
    assert not store.is_loaded
    with pytest.raises(NotLoadedError):
        store.all()


def test_load_sorts_ascending(make_record):
    store = SeriesStore()
    store.load([make_record(date(2020, 3, 1), "0.3"), make_record(date(2020, 1, 1), "0.1"), make_record(date(2020, 2, 1), "0.2")])

    starts = [e.timestamp_start for e in store.all()]
    assert starts == [datetime(2020, 1, 1), datetime(2020, 2, 1), datetime(2020, 3, 1)]


def test_all_returns_independent_copies(monthly_records):
    store = SeriesStore()
    store.load(monthly_records)

    first = store.all()
    n = len(first)
    first.clear()
    first_again = store.all()
    first_again.append(first_again[0])

    assert len(store.all()) == n
    assert store.all() is not store.all()


def test_load_twice_is_idempotent(monthly_records):
    store = SeriesStore()
    store.load(monthly_records)
    a = store.all()
    store.load(monthly_records)
    assert store.all() == a


def test_reload_replaces_instead_of_merging(make_record, monthly_records):
    store = SeriesStore()
    store.load(monthly_records)
    store.load([make_record(date(2022, 1, 1), "0.5")])
    assert [e.timestamp_start for e in store.all()] == [datetime(2022, 1, 1)]


def test_parse_error_keeps_previous_series(make_record, monthly_records):
    store = SeriesStore()
    store.load(monthly_records)
    before = store.all()

    bad = [make_record(date(2022, 1, 1), "0.5"), {"data": "xx/01/2022", "datafim": "01/02/2022", "valor": "0.1"}]
    with pytest.raises(ParseError):
        store.load(bad)

    assert store.all() == before


def test_duplicates_keep_last_by_default(make_record):
    store = SeriesStore()
    store.load([make_record(date(2020, 1, 1), "0.1"), make_record(date(2020, 1, 1), "0.2")])

    out = store.all()
    assert len(out) == 1
    assert out[0].rate_percent == 0.2


def test_duplicates_raise_when_configured(make_record):
    store = SeriesStore(on_conflict="raise")
    with pytest.raises(DataQualityError):
        store.load([make_record(date(2020, 1, 1), "0.1"), make_record(date(2020, 1, 1), "0.2")])
    assert not store.is_loaded


def test_invalid_on_conflict_raises():
    with pytest.raises(ValueError):
        SeriesStore(on_conflict="merge")


def test_to_frame_matches_series_and_validates(monthly_records):
    store = SeriesStore()
    store.load(monthly_records)

    df = store.to_frame()
    assert list(df.columns) == FRAME_COLUMNS
    assert len(df) == len(monthly_records)
    validate_poupanca_series(df)


def test_validate_rejects_unsorted_frame(monthly_records):
    store = SeriesStore()
    store.load(monthly_records)
    df = store.to_frame().iloc[::-1].reset_index(drop=True)

    with pytest.raises(DataQualityError):
        validate_poupanca_series(df)


def test_validate_rejects_missing_columns(monthly_records):
    store = SeriesStore()
    store.load(monthly_records)
    with pytest.raises(DataQualityError):
        validate_poupanca_series(store.to_frame().drop(columns=["rate_percent"]))
