"""
Serviço de conta do usuário autenticado.
"""

from __future__ import annotations

from typing import Any, Optional

from atividades.core.exceptions import (
    AuthError,
    ConfirmationRequiredException,
    SessionNotInitializedException,
)
from atividades.core.services.session_manager import SessionManager


class AccountService:
    """Operações sobre a conta da sessão atual."""

    def __init__(self, manager: SessionManager, logger: Optional[Any] = None) -> None:
        self._manager = manager
        if not logger:
            from atividades.infrastructure.logging import get_logger
            logger = get_logger().com_contexto(componente="conta")
        self.logger = logger

    async def delete_account(self, confirm: bool = False) -> None:
        """
        Exclui definitivamente a conta logada e encerra a sessão.

        Args:
            confirm: Confirmação explícita do usuário

        Raises:
            SessionNotInitializedException: Nenhum usuário autenticado.
            ConfirmationRequiredException: Confirmação não informada.
            AuthError: Backend recusou ou não suporta a exclusão.
        """
        session = await self._manager.current_valid()
        if session is None:
            raise SessionNotInitializedException("Nenhuma sessão ativa para excluir a conta")

        if not confirm:
            raise ConfirmationRequiredException(
                "Exclusão de conta exige confirmação",
                details={"usuario": session.email},
            )

        with self.logger.etapa("Exclusão de conta", usuario=session.email):
            await self._manager.backend.delete_user(session.user_id)

        try:
            await self._manager.sign_out()
        except AuthError as exc:
            # A sessão local já foi limpa pelo gerenciador
            self.logger.aviso("Logout após exclusão falhou no backend", erro=str(exc))
