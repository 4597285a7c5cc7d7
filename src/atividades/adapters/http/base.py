"""Base controller com funcionalidades comuns."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter

from atividades.infrastructure.logging import get_logger


class BaseController:
    """
    Classe base para todos os controllers da API.

    Fornece:
    - Router próprio com prefixo e tags
    - Logging padronizado de requisição e resposta
    """

    prefix: str = ""
    tags: list[str] = []

    def __init__(self) -> None:
        self.logger = get_logger().com_contexto(controller=self.__class__.__name__)
        self.router = APIRouter(prefix=self.prefix, tags=list(self.tags))
        self._register_routes()

    def _register_routes(self) -> None:
        raise NotImplementedError

    def log_request(self, endpoint: str, params: Optional[dict] = None) -> None:
        """
        Registra detalhes da requisição.

        Args:
            endpoint: Nome do endpoint
            params: Parâmetros da requisição (nunca inclua senhas)
        """
        self.logger.debug(f"Request: {endpoint}", **(params or {}))

    def log_response(self, endpoint: str, response: Any = None) -> None:
        self.logger.debug(f"Response: {endpoint}", resposta=response)
