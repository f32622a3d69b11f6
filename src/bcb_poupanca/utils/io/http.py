from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Protocol

import requests


class HttpTransport(Protocol):
    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response: ...


@dataclass(frozen=True)
class HTTPConfig:
    timeout_sec: int = 30
    # SGS e o proxy devolvem JSON
    headers: Dict[str, str] = field(default_factory=lambda: {"Accept": "application/json"})


class RequestsTransport:
    """
    GET único sobre requests.Session, usado para baixar a série da poupança.

    Não há retry: erros de rede e de status sobem para quem chamou.
    """

    def __init__(self, cfg: Optional[HTTPConfig] = None):
        self.cfg = cfg or HTTPConfig()
        self.session = requests.Session()
        self.session.headers.update(self.cfg.headers)

    def get(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> requests.Response:
        return self.session.get(url, params=params, headers=headers, timeout=self.cfg.timeout_sec)
