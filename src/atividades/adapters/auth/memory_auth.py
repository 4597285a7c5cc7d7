"""
Backend de autenticação em memória.

Usado em desenvolvimento sem Supabase e como dublê determinístico nos
testes: permite falhar a próxima chamada, atrasar respostas e emitir
eventos arbitrários.
"""

from __future__ import annotations

import asyncio
import time
import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from atividades.core.exceptions import (
    AuthError,
    DuplicateAccountError,
    InvalidCredentialsError,
    UnconfirmedAccountError,
)
from atividades.core.interfaces import AuthBackend, BackendListener, BackendSubscription
from atividades.core.models import AuthEvent, Identity, Session


@dataclass
class _Usuario:
    id: str
    email: str
    senha: str
    confirmado: bool = True


class _Handle:
    def __init__(self, backend: InMemoryAuthBackend, listener: BackendListener) -> None:
        self._backend = backend
        self._listener = listener

    def unsubscribe(self) -> None:
        if self._listener in self._backend._listeners:
            self._backend._listeners.remove(self._listener)


class InMemoryAuthBackend(AuthBackend):
    """Implementação de ``AuthBackend`` mantida inteiramente em memória."""

    TOKEN_TTL = 3600

    def __init__(
        self,
        *,
        require_confirmation: bool = False,
        emit_events: bool = True,
        delay: float = 0.0,
        session: Optional[Session] = None,
    ) -> None:
        self.require_confirmation = require_confirmation
        self.emit_events = emit_events
        self.delay = delay
        self.calls: List[str] = []

        self._users: Dict[str, _Usuario] = {}
        self._session = session
        self._listeners: List[BackendListener] = []
        self._falhas: Dict[str, Exception] = {}
        self._deleted: List[str] = []

    # ------------------------------------------------------------------
    # Ganchos de teste
    # ------------------------------------------------------------------

    def add_user(self, email: str, senha: str, *, confirmado: bool = True, user_id: Optional[str] = None) -> Identity:
        """Cadastra usuário diretamente, sem passar pelo fluxo de sign-up."""
        usuario = _Usuario(id=user_id or str(uuid.uuid4()), email=email, senha=senha, confirmado=confirmado)
        self._users[email] = usuario
        return Identity(id=usuario.id, email=email)

    def confirm(self, email: str) -> None:
        self._users[email].confirmado = True

    def fail_next(self, exc: Exception, operacao: str = "*") -> None:
        """Faz a próxima chamada (ou a próxima da operação indicada) levantar ``exc``."""
        self._falhas[operacao] = exc

    def emit(self, event: AuthEvent, session: Optional[Session] = None) -> None:
        """Entrega um evento arbitrário aos listeners, como faria o backend real."""
        if event.is_terminal:
            session = None
        self._session = session
        for listener in list(self._listeners):
            listener(event, session)

    def make_session(self, identity: Identity) -> Session:
        return Session(
            user=identity,
            access_token=uuid.uuid4().hex,
            refresh_token=uuid.uuid4().hex,
            expires_at=int(time.time()) + self.TOKEN_TTL,
        )

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    @property
    def deleted_users(self) -> List[str]:
        return list(self._deleted)

    # ------------------------------------------------------------------
    # AuthBackend
    # ------------------------------------------------------------------

    def on_change(self, listener: BackendListener) -> BackendSubscription:
        self._listeners.append(listener)
        return _Handle(self, listener)

    async def get_current_session(self) -> Optional[Session]:
        await self._chamada("get_current_session")
        return self._session

    async def password_sign_in(self, email: str, password: str) -> None:
        await self._chamada("sign_in")
        usuario = self._users.get(email)
        if usuario is None or usuario.senha != password:
            raise InvalidCredentialsError("Credenciais inválidas", details={"email": email})
        if not usuario.confirmado:
            raise UnconfirmedAccountError("Conta aguardando confirmação por email", details={"email": email})
        self._transicao(AuthEvent.SIGNED_IN, self.make_session(Identity(id=usuario.id, email=email)))

    async def password_sign_up(self, email: str, password: str) -> Optional[Session]:
        await self._chamada("sign_up")
        if email in self._users:
            raise DuplicateAccountError("Já existe conta com este email", details={"email": email})
        identity = self.add_user(email, password, confirmado=not self.require_confirmation)
        if self.require_confirmation:
            return None
        session = self.make_session(identity)
        self._transicao(AuthEvent.SIGNED_IN, session)
        return session

    async def sign_out(self) -> None:
        await self._chamada("sign_out")
        self._transicao(AuthEvent.SIGNED_OUT, None)

    async def refresh_session(self) -> Optional[Session]:
        await self._chamada("refresh_session")
        if self._session is None:
            raise AuthError("Nenhuma sessão para renovar")
        session = self.make_session(self._session.user)
        self._transicao(AuthEvent.TOKEN_REFRESHED, session)
        return session

    async def delete_user(self, user_id: str) -> None:
        await self._chamada("delete_user")
        for email, usuario in list(self._users.items()):
            if usuario.id == user_id:
                del self._users[email]
                self._deleted.append(user_id)
                return
        raise AuthError("Usuário não encontrado", details={"usuario": user_id})

    # ------------------------------------------------------------------
    # Interno
    # ------------------------------------------------------------------

    async def _chamada(self, operacao: str) -> None:
        self.calls.append(operacao)
        if self.delay:
            await asyncio.sleep(self.delay)
        falha: Any = self._falhas.pop(operacao, None) or self._falhas.pop("*", None)
        if falha is not None:
            raise falha

    def _transicao(self, event: AuthEvent, session: Optional[Session]) -> None:
        self._session = session
        if self.emit_events:
            for listener in list(self._listeners):
                listener(event, session)
