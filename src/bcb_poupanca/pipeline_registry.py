# src/bcb_poupanca/pipeline_registry.py
from __future__ import annotations

from kedro.pipeline import Pipeline

from bcb_poupanca.pipelines.poupanca.pipeline import create_pipeline as poupanca_pipeline


def register_pipelines() -> dict[str, Pipeline]:
    poupanca = poupanca_pipeline()

    pipelines = {
        "poupanca": poupanca,
    }

    pipelines["__default__"] = pipelines["poupanca"]

    return pipelines
