"""
Gerenciador de sessão do processo.

Única fonte de verdade sobre "há um usuário logado, e quem é". Mantém um
slot com a sessão atual, escrito apenas pelo handler de mudanças do backend,
e repassa cada transição aos assinantes antes de qualquer view protegida
ler o novo valor.
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import Any, Callable, Deque, List, Optional, Tuple

from atividades.core.exceptions import AuthError
from atividades.core.interfaces import AuthBackend, BackendSubscription
from atividades.core.models import AuthEvent, AuthState, Session
from atividades.core.services.credentials import validar_credenciais

SessionListener = Callable[[Optional[Session]], None]


class Subscription:
    """
    Handle de assinatura devolvido por ``SessionManager.subscribe``.

    Pode ser liberado explicitamente com ``unsubscribe()`` ou usado como
    context manager. Liberar duas vezes não tem efeito.
    """

    def __init__(self, manager: SessionManager, listener: SessionListener) -> None:
        self._manager = manager
        self._listener = listener
        self._active = True

    @property
    def active(self) -> bool:
        return self._active

    def unsubscribe(self) -> None:
        if not self._active:
            return
        self._active = False
        self._manager._release(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.unsubscribe()


class SessionManager:
    """
    Serviço de ciclo de vida da autenticação.

    Responsabilidades:
    - Resolve a sessão persistida na inicialização (UNRESOLVED -> SIGNED_IN/SIGNED_OUT)
    - Traduz eventos do backend em transições, na ordem em que chegam
    - Notifica assinantes de forma síncrona a cada transição
    - Falha fechado: erro de renovação de token encerra a sessão
    """

    def __init__(self, backend: AuthBackend, logger: Optional[Any] = None) -> None:
        if not logger:
            from atividades.infrastructure.logging import get_logger
            logger = get_logger().com_contexto(componente="sessao")
        self.logger = logger

        self._backend = backend
        self._session: Optional[Session] = None
        self._state = AuthState.UNRESOLVED
        self._subscriptions: List[Subscription] = []
        self._backend_subscription: Optional[BackendSubscription] = None

        # Fila de eventos: preserva a ordem mesmo com emissões reentrantes
        self._pending: Deque[Tuple[AuthEvent, Optional[Session]]] = deque()
        self._dispatching = False
        # Conta eventos entregues; usado para decidir quem "chegou por último"
        self._sequence = 0
        # Serializa renovações disparadas por token expirado
        self._refresh_lock = asyncio.Lock()

    # ========================================================================
    # Leitura
    # ========================================================================

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def is_signed_in(self) -> bool:
        return self._state is AuthState.SIGNED_IN

    @property
    def backend(self) -> AuthBackend:
        return self._backend

    def current(self) -> Optional[Session]:
        """Sessão conforme o último evento conhecido. Nunca bloqueia."""
        return self._session

    async def current_valid(self) -> Optional[Session]:
        """
        Sessão atual, renovada antes quando o token já expirou.

        Token expirado que não pode ser renovado encerra a sessão
        (TOKEN_REFRESH_FAILED); nunca devolve credencial vencida.
        """
        if not self._expired():
            return self._session

        async with self._refresh_lock:
            # Outra chamada pode ter renovado enquanto esperávamos
            if not self._expired():
                return self._session

            self.logger.info("Token expirado; renovando sessão", usuario=self._session.user_id)
            await self.refresh()
            if self._expired():
                self.logger.aviso("Backend devolveu token já expirado; encerrando sessão")
                self._handle_backend_event(AuthEvent.TOKEN_REFRESH_FAILED, None)
            return self._session

    def _expired(self) -> bool:
        session = self._session
        return self._state is AuthState.SIGNED_IN and session is not None and session.is_expired()

    # ========================================================================
    # Ciclo de vida
    # ========================================================================

    async def start(self) -> None:
        """
        Conecta ao backend e resolve as credenciais persistidas.

        Falha do backend degrada para SIGNED_OUT em vez de travar a aplicação.
        """
        if self._backend_subscription is not None:
            return

        self._backend_subscription = self._backend.on_change(self._handle_backend_event)

        session: Optional[Session] = None
        try:
            await self._backend.connect()
            session = await self._backend.get_current_session()
            if session is not None and session.is_expired():
                self.logger.info("Credencial persistida expirada; renovando antes de liberar", usuario=session.user_id)
                session = await self._backend.refresh_session()
                if session is not None and session.is_expired():
                    session = None
        except AuthError as exc:
            self.logger.aviso("Backend indisponível na inicialização; seguindo deslogado", erro=str(exc))
            session = None

        # Um evento do backend pode ter resolvido o estado durante a espera
        if self._state is AuthState.UNRESOLVED:
            self._handle_backend_event(AuthEvent.INITIAL_SESSION, session)

        # Credencial persistida pode ter vencido enquanto o processo estava parado
        await self.current_valid()

    async def close(self) -> None:
        """Libera todas as assinaturas e o listener do backend."""
        for subscription in list(self._subscriptions):
            subscription.unsubscribe()

        if self._backend_subscription is not None:
            self._backend_subscription.unsubscribe()
            self._backend_subscription = None

        await self._backend.close()
        self.logger.debug("Gerenciador de sessão encerrado.")

    async def __aenter__(self) -> SessionManager:
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    # ========================================================================
    # Operações de credencial
    # ========================================================================

    async def sign_in(self, email: str, password: str) -> None:
        """
        Envia credenciais ao backend.

        A sessão é atualizada pelo caminho de notificação, não no retorno.

        Raises:
            AuthError: Credenciais rejeitadas ou falha de transporte.
        """
        email, password = validar_credenciais(email, password)
        try:
            await self._backend.password_sign_in(email, password)
        except AuthError as exc:
            self.logger.aviso("Login rejeitado", usuario=email, motivo=type(exc).__name__)
            raise
        self.logger.info("Credenciais aceitas pelo backend", usuario=email)

    async def sign_up(self, email: str, password: str) -> bool:
        """
        Solicita criação de conta.

        Returns:
            True quando o backend exige confirmação por email antes de abrir sessão.

        Raises:
            AuthError: Dados inválidos, conta duplicada ou falha de transporte.
        """
        email, password = validar_credenciais(email, password)
        try:
            session = await self._backend.password_sign_up(email, password)
        except AuthError as exc:
            self.logger.aviso("Cadastro rejeitado", usuario=email, motivo=type(exc).__name__)
            raise

        requires_confirmation = session is None
        self.logger.sucesso("Conta criada", usuario=email, confirmacao_pendente=requires_confirmation)
        return requires_confirmation

    async def sign_out(self) -> None:
        """
        Invalida a credencial e limpa a sessão.

        Idempotente: sem sessão ativa não faz nada. Se o backend falhar, a
        sessão local é limpa mesmo assim e o AuthError é propagado.
        """
        if self._state is AuthState.SIGNED_OUT:
            self.logger.debug("Logout ignorado: nenhuma sessão ativa")
            return

        sequence = self._sequence
        try:
            await self._backend.sign_out()
        except AuthError as exc:
            self.logger.aviso("Falha ao invalidar credencial no backend; limpando sessão local", erro=str(exc))
            self._settle(sequence, AuthEvent.SIGNED_OUT, None)
            raise
        self._settle(sequence, AuthEvent.SIGNED_OUT, None)

    async def refresh(self) -> Optional[Session]:
        """
        Renova o token da sessão atual.

        Qualquer falha encerra a sessão (SIGNED_OUT) sem levantar erro ao chamador.
        """
        if self._state is not AuthState.SIGNED_IN:
            return None

        sequence = self._sequence
        try:
            session = await self._backend.refresh_session()
        except AuthError as exc:
            self.logger.aviso("Renovação de token falhou; encerrando sessão", erro=str(exc))
            self._handle_backend_event(AuthEvent.TOKEN_REFRESH_FAILED, None)
            return None

        if session is None:
            self._handle_backend_event(AuthEvent.TOKEN_REFRESH_FAILED, None)
            return None

        self._settle(sequence, AuthEvent.TOKEN_REFRESHED, session)
        return self._session

    # ========================================================================
    # Assinaturas
    # ========================================================================

    def subscribe(self, listener: SessionListener) -> Subscription:
        """
        Registra listener chamado com a nova sessão a cada transição.

        Se o estado já foi resolvido, o listener recebe o valor atual uma
        vez, imediatamente, como primeira notificação.
        """
        subscription = Subscription(self, listener)
        self._subscriptions.append(subscription)
        if self._state is not AuthState.UNRESOLVED:
            self._notify(subscription, self._session)
        return subscription

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def _release(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    # ========================================================================
    # Transições
    # ========================================================================

    def _settle(self, sequence: int, event: AuthEvent, session: Optional[Session]) -> None:
        """
        Aplica localmente o resultado de uma chamada que terminou.

        Se o backend entregou qualquer evento durante a chamada, o último
        evento dele prevalece e nada é aplicado aqui.
        """
        if self._sequence == sequence:
            self._handle_backend_event(event, session)

    def _handle_backend_event(self, event: AuthEvent, session: Optional[Session]) -> None:
        """Enfileira o evento e drena a fila em ordem de chegada."""
        self._pending.append((event, session))
        if self._dispatching:
            return

        self._dispatching = True
        try:
            while self._pending:
                self._apply(*self._pending.popleft())
        finally:
            self._dispatching = False

    def _apply(self, event: AuthEvent, session: Optional[Session]) -> None:
        self._sequence += 1

        if event.is_terminal:
            session = None

        if session is None and self._state is AuthState.SIGNED_OUT:
            self.logger.debug("Evento sem efeito: sessão já ausente", evento=event.value)
            return

        previous = self._state
        self._session = session
        self._state = AuthState.SIGNED_IN if session is not None else AuthState.SIGNED_OUT

        self.logger.info(
            "Transição de sessão",
            evento=event.value,
            estado_anterior=previous.value,
            estado=self._state.value,
            usuario=session.email if session else None,
        )
        self._broadcast(session)

    def _broadcast(self, session: Optional[Session]) -> None:
        for subscription in list(self._subscriptions):
            if subscription.active:
                self._notify(subscription, session)

    def _notify(self, subscription: Subscription, session: Optional[Session]) -> None:
        try:
            subscription._listener(session)
        except Exception as exc:
            # Erro de um assinante não impede a entrega aos demais
            self.logger.erro("Listener de sessão falhou", erro=str(exc), listener=repr(subscription._listener))
