from __future__ import annotations

import pandas as pd


class DataQualityError(RuntimeError):
    pass


def validate_poupanca_series(df: pd.DataFrame) -> None:
    required = ["timestamp_start", "timestamp_end", "day_of_month", "rate_percent"]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise DataQualityError(f"Missing columns in poupança series: {missing}")

    if df["timestamp_start"].isna().any():
        raise DataQualityError("timestamp_start has nulls")
    if df["timestamp_end"].isna().any():
        raise DataQualityError("timestamp_end has nulls")
    if df["rate_percent"].isna().any():
        raise DataQualityError("rate_percent has nulls")

    if df.duplicated(subset=["timestamp_start"]).any():
        raise DataQualityError("Duplicates on timestamp_start")

    if not df["timestamp_start"].is_monotonic_increasing:
        raise DataQualityError("timestamp_start is not in ascending order")

    if not df["day_of_month"].between(1, 31).all():
        raise DataQualityError("day_of_month out of range 1..31")

    if (df["timestamp_end"] < df["timestamp_start"]).any():
        raise DataQualityError("timestamp_end before timestamp_start")


def validate_poupanca_monthly(df: pd.DataFrame) -> None:
    required = ["ref_month", "rate_percent", "accumulated"]
    missing = [c for c in required if c not in df.columns]
    if missing:
        raise DataQualityError(f"Missing columns in poupança monthly: {missing}")

    if df.duplicated(subset=["ref_month"]).any():
        raise DataQualityError("Duplicates on ref_month")
