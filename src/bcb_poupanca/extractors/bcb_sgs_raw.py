from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from bcb_poupanca.domain.poupanca.errors import ResponseShapeError
from bcb_poupanca.utils.io.http import HttpTransport

logger = logging.getLogger(__name__)

POUPANCA_SERIES_ID = 195
REQUIRED_FIELDS = ("data", "datafim", "valor")


@dataclass(frozen=True)
class SgsConfig:
    series_id: int = POUPANCA_SERIES_ID
    base_url: str = "https://api.bcb.gov.br/dados/serie"
    proxy_url: Optional[str] = None
    proxy_name: str = "poupanca"


class BcbSgsRawExtractor:
    """
    Busca a série do SGS (por padrão a 195, poupança) e devolve os registros
    brutos exatamente como vieram no JSON.

    Método público único:
      - fetch_records(): sempre retorna List[dict] com 'data', 'datafim', 'valor'.
    """

    def __init__(self, transport: HttpTransport, cfg: Optional[SgsConfig] = None):
        self.transport = transport
        self.cfg = cfg or SgsConfig()

    def _series_url(self) -> str:
        return f"{self.cfg.base_url.rstrip('/')}/bcdata.sgs.{self.cfg.series_id}/dados"

    def _build_request(self, start: Optional[str], end: Optional[str]) -> tuple[str, Dict[str, Any]]:
        url = self._series_url()
        params: Dict[str, Any] = {"formato": "json"}
        if start:
            params["dataInicial"] = start
        if end:
            params["dataFinal"] = end

        if not self.cfg.proxy_url:
            return url, params

        # Proxy recebe a URL completa do SGS como parâmetro
        return self.cfg.proxy_url, {"name": self.cfg.proxy_name, "url": f"{url}?{urlencode(params)}"}

    @staticmethod
    def _check_shape(payload: Any) -> List[Dict[str, Any]]:
        if not isinstance(payload, list):
            raise ResponseShapeError(f"Resposta do SGS deveria ser uma lista, veio {type(payload).__name__}")

        for i, item in enumerate(payload):
            if not isinstance(item, dict):
                raise ResponseShapeError(f"Item {i} da resposta não é um objeto: {item!r}")
            missing = [f for f in REQUIRED_FIELDS if f not in item]
            if missing:
                raise ResponseShapeError(f"Item {i} da resposta sem campos {missing}: {item!r}")
        return payload

    def fetch_records(
        self,
        start: Optional[str] = None,  # dd/mm/aaaa
        end: Optional[str] = None,    # dd/mm/aaaa
    ) -> List[Dict[str, Any]]:
        # Se um foi passado e o outro não, melhor falhar cedo (evita ambiguidades)
        if bool(start) != bool(end):
            raise ValueError("Para extrair com período, informe start e end (dd/mm/aaaa).")

        url, params = self._build_request(start, end)
        r = self.transport.get(url, params=params)
        r.raise_for_status()

        try:
            payload = r.json()
        except ValueError as exc:
            raise ResponseShapeError("Resposta do SGS não é JSON válido") from exc

        records = self._check_shape(payload)
        logger.info("SGS %s: %s registros recebidos", self.cfg.series_id, len(records))
        return records
