from __future__ import annotations

import logging
from typing import Any, Dict

import pandas as pd
from kedro.framework.hooks import hook_impl

log = logging.getLogger(__name__)


class DataObservabilityHooks:
    """Loga o andamento do pipeline da poupança: nós, tamanhos de saída e falhas."""

    @hook_impl
    def before_node_run(self, node, inputs: Dict[str, Any], is_async: bool, **kwargs):
        log.info("Poupança: iniciando %s", node.name)

    @hook_impl
    def after_node_run(self, node, outputs: Dict[str, Any], inputs: Dict[str, Any], **kwargs):
        for name, out in outputs.items():
            if isinstance(out, pd.DataFrame):
                log.info("Poupança: %s -> %s linhas", name, len(out))
                if out.empty:
                    log.warning("Poupança: %s saiu vazio (nó %s)", name, node.name)
            elif isinstance(out, list):
                # registros brutos do SGS
                log.info("Poupança: %s -> %s registros brutos", name, len(out))

    @hook_impl
    def on_node_error(self, error: Exception, node, **kwargs):
        log.error("Poupança: nó %s falhou: %s", node.name, error)
