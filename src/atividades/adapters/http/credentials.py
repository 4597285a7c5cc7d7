"""Credenciais de requisição emitidas pela API no login.

O processo guarda uma única sessão do backend; cada cliente HTTP que fez
login recebe um ``session_id`` próprio (cookie HttpOnly ou ``Authorization:
Bearer``). Sem um ``session_id`` válido para o usuário da sessão atual, a
requisição é tratada como deslogada.
"""

from __future__ import annotations

import uuid
from typing import Dict, Optional

from fastapi import Request, Response

from atividades.core.models import Session

SESSION_COOKIE = "atividades_session"


class CredentialStore:
    """``session_id`` -> ``user_id`` dos clientes autenticados."""

    def __init__(self) -> None:
        self._emitidas: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._emitidas)

    def emitir(self, session: Session) -> str:
        session_id = str(uuid.uuid4())
        self._emitidas[session_id] = session.user_id
        return session_id

    def validar(self, session_id: Optional[str], session: Optional[Session]) -> bool:
        if not session_id or session is None:
            return False
        return self._emitidas.get(session_id) == session.user_id

    def revogar(self, session_id: Optional[str]) -> None:
        if session_id:
            self._emitidas.pop(session_id, None)

    def sincronizar(self, session: Optional[Session]) -> None:
        """
        Listener do ``SessionManager``.

        Logout, falha de renovação ou troca de usuário invalidam as
        credenciais emitidas para o usuário anterior.
        """
        for session_id, user_id in list(self._emitidas.items()):
            if session is None or user_id != session.user_id:
                del self._emitidas[session_id]


def credencial_da_requisicao(request: Request) -> Optional[str]:
    """Lê o ``session_id`` do header ``Authorization`` ou do cookie."""
    esquema, _, valor = request.headers.get("authorization", "").partition(" ")
    if esquema.lower() == "bearer" and valor.strip():
        return valor.strip()
    return request.cookies.get(SESSION_COOKIE)


def gravar_cookie(request: Request, response: Response, session_id: str) -> None:
    response.set_cookie(
        SESSION_COOKIE,
        session_id,
        httponly=True,
        samesite="lax",
        secure=request.url.scheme == "https",
    )


def apagar_cookie(response: Response) -> None:
    response.delete_cookie(SESSION_COOKIE, httponly=True, samesite="lax")


__all__ = [
    "SESSION_COOKIE",
    "CredentialStore",
    "apagar_cookie",
    "credencial_da_requisicao",
    "gravar_cookie",
]
