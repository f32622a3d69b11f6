from __future__ import annotations

from kedro.pipeline import Pipeline, node

from bcb_poupanca.pipelines.poupanca.nodes import (
    fetch_poupanca_records,
    build_poupanca_series,
    validate_poupanca_series_df,
    build_poupanca_monthly,
    build_poupanca_summary,
)


def create_pipeline(**kwargs) -> Pipeline:
    return Pipeline(
        [
            node(
                func=fetch_poupanca_records,
                inputs="params:poupanca",
                outputs="poupanca_raw_records",
                name="poupanca_fetch_records",
            ),
            node(
                func=build_poupanca_series,
                inputs=["poupanca_raw_records", "params:poupanca"],
                outputs="poupanca_series__pre",
                name="poupanca_build_series",
            ),
            node(
                func=validate_poupanca_series_df,
                inputs="poupanca_series__pre",
                outputs="poupanca_series",
                name="poupanca_validate_series",
            ),
            node(
                func=build_poupanca_monthly,
                inputs=["poupanca_raw_records", "params:poupanca"],
                outputs="poupanca_monthly",
                name="poupanca_build_monthly",
            ),
            node(
                func=build_poupanca_summary,
                inputs=["poupanca_raw_records", "params:poupanca"],
                outputs="poupanca_summary",
                name="poupanca_build_summary",
            ),
        ]
    )
