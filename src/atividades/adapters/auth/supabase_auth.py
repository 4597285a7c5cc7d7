"""
Backend de autenticação sobre o Supabase Auth (GoTrue).

Usa o cliente assíncrono oficial. Os eventos de ``on_auth_state_change``
são traduzidos para ``AuthEvent`` e repassados, na ordem em que chegam,
aos listeners registrados antes ou depois da conexão.
"""

from __future__ import annotations

from typing import Any, List, Optional

from supabase import AsyncClient, AuthError as SupabaseAuthError, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from atividades.core.exceptions import (
    AtividadesBaseException,
    AuthError,
    AuthTransportError,
    DuplicateAccountError,
    InvalidCredentialsError,
    UnconfirmedAccountError,
)
from atividades.core.interfaces import AuthBackend, BackendListener, BackendSubscription, SessionStorage
from atividades.core.models import AuthEvent, Identity, Session

# Eventos do GoTrue sem equivalente direto
_EVENTOS_ENCERRAMENTO = {"SIGNED_OUT", "USER_DELETED"}

_CODIGOS_CREDENCIAL = {"invalid_credentials", "invalid_grant"}
_CODIGOS_DUPLICADO = {"user_already_exists", "email_exists"}
_CODIGOS_NAO_CONFIRMADO = {"email_not_confirmed"}


def converter_sessao(raw: Any) -> Optional[Session]:
    """Converte a sessão do cliente Supabase no modelo do domínio."""
    if raw is None or getattr(raw, "user", None) is None:
        return None
    user = raw.user
    return Session(
        user=Identity(id=str(user.id), email=user.email or ""),
        access_token=raw.access_token,
        refresh_token=getattr(raw, "refresh_token", None),
        expires_at=getattr(raw, "expires_at", None),
    )


def traduzir_evento(nome: str, session: Optional[Session]) -> AuthEvent:
    """Mapeia o nome do evento do GoTrue para ``AuthEvent``."""
    if nome in _EVENTOS_ENCERRAMENTO:
        return AuthEvent.SIGNED_OUT
    if nome == "TOKEN_REFRESHED" and session is None:
        return AuthEvent.TOKEN_REFRESH_FAILED
    try:
        return AuthEvent(nome)
    except ValueError:
        # PASSWORD_RECOVERY, MFA_CHALLENGE_VERIFIED e afins
        return AuthEvent.USER_UPDATED if session is not None else AuthEvent.SIGNED_OUT


def mapear_erro(exc: Exception, operacao: str) -> AuthError:
    """
    Converte exceções do cliente Supabase na taxonomia ``AuthError``.

    Erros sem status HTTP, com status 0 ou 5xx são tratados como falha de transporte.
    """
    if isinstance(exc, AuthError):
        return exc

    code = getattr(exc, "code", None)
    status = getattr(exc, "status", None)
    mensagem = str(exc) or type(exc).__name__
    details = {"operacao": operacao, "codigo": code, "status": status}

    if code in _CODIGOS_CREDENCIAL or "invalid login credentials" in mensagem.lower():
        return InvalidCredentialsError("Credenciais inválidas", details=details, cause=exc)
    if code in _CODIGOS_NAO_CONFIRMADO:
        return UnconfirmedAccountError("Conta aguardando confirmação por email", details=details, cause=exc)
    if code in _CODIGOS_DUPLICADO:
        return DuplicateAccountError("Já existe conta com este email", details=details, cause=exc)
    if not isinstance(exc, SupabaseAuthError) or not status or status >= 500:
        return AuthTransportError("Falha de comunicação com o backend de autenticação", details=details, cause=exc)
    return AuthError(mensagem, details=details, cause=exc)


class _ListenerHandle:
    def __init__(self, backend: SupabaseAuthBackend, listener: BackendListener) -> None:
        self._backend = backend
        self._listener = listener

    def unsubscribe(self) -> None:
        if self._listener in self._backend._listeners:
            self._backend._listeners.remove(self._listener)


class SupabaseAuthBackend(AuthBackend):
    """
    Implementação de ``AuthBackend`` com ``supabase-py`` assíncrono.

    A chave de serviço (service role) é opcional e só é usada para excluir
    contas pela API administrativa.
    """

    def __init__(
        self,
        url: Optional[str],
        key: Optional[str],
        *,
        service_key: Optional[str] = None,
        storage: Optional[SessionStorage] = None,
        persist_session: bool = True,
        auto_refresh_token: bool = True,
        logger: Any = None,
    ) -> None:
        self.url = url
        self.key = key
        self.service_key = service_key
        self.storage = storage
        self.persist_session = persist_session
        self.auto_refresh_token = auto_refresh_token

        if not logger:
            from atividades.infrastructure.logging import get_logger
            logger = get_logger().com_contexto(componente="supabase_auth")
        self.logger = logger

        self._client: Optional[AsyncClient] = None
        self._admin_client: Optional[AsyncClient] = None
        self._listeners: List[BackendListener] = []
        self._auth_subscription: Any = None

    # ------------------------------------------------------------------
    # Conexão
    # ------------------------------------------------------------------

    @property
    def client(self) -> AsyncClient:
        if self._client is None:
            raise AuthTransportError("Cliente Supabase não conectado")
        return self._client

    async def connect(self) -> None:
        if self._client is not None:
            return
        if not self.url or not self.key:
            raise AuthTransportError(
                "Configuração do Supabase ausente",
                details={"SUPABASE_URL": bool(self.url), "SUPABASE_KEY": bool(self.key)},
            )

        options = {
            "persist_session": self.persist_session,
            "auto_refresh_token": self.auto_refresh_token,
        }
        if self.storage is not None:
            options["storage"] = self.storage

        try:
            self._client = await acreate_client(self.url, self.key, options=AsyncClientOptions(**options))
        except Exception as exc:
            raise mapear_erro(exc, "connect") from exc

        self._auth_subscription = self._client.auth.on_auth_state_change(self._dispatch)
        self.logger.debug("Cliente Supabase conectado", url=self.url)

    async def close(self) -> None:
        if self._auth_subscription is not None:
            self._auth_subscription.unsubscribe()
            self._auth_subscription = None
        self._client = None
        self._admin_client = None

    # ------------------------------------------------------------------
    # Eventos
    # ------------------------------------------------------------------

    def on_change(self, listener: BackendListener) -> BackendSubscription:
        self._listeners.append(listener)
        return _ListenerHandle(self, listener)

    def _dispatch(self, event: str, raw_session: Any) -> None:
        session = converter_sessao(raw_session)
        nome = getattr(event, "value", event)
        evento = traduzir_evento(str(nome), session)
        self.logger.debug("Evento do Supabase Auth", evento=nome, traduzido=evento.value)
        for listener in list(self._listeners):
            listener(evento, session)

    # ------------------------------------------------------------------
    # Operações
    # ------------------------------------------------------------------

    async def get_current_session(self) -> Optional[Session]:
        try:
            raw = await self.client.auth.get_session()
        except AtividadesBaseException:
            raise
        except Exception as exc:
            raise mapear_erro(exc, "get_session") from exc
        return converter_sessao(raw)

    async def password_sign_in(self, email: str, password: str) -> None:
        try:
            await self.client.auth.sign_in_with_password({"email": email, "password": password})
        except AtividadesBaseException:
            raise
        except Exception as exc:
            raise mapear_erro(exc, "sign_in") from exc

    async def password_sign_up(self, email: str, password: str) -> Optional[Session]:
        try:
            response = await self.client.auth.sign_up({"email": email, "password": password})
        except AtividadesBaseException:
            raise
        except Exception as exc:
            raise mapear_erro(exc, "sign_up") from exc

        user = getattr(response, "user", None)
        # Com confirmação por email ativa, o GoTrue responde a emails já
        # cadastrados com um usuário sem identidades em vez de erro
        if user is not None and getattr(user, "identities", None) == []:
            raise DuplicateAccountError("Já existe conta com este email", details={"email": email})
        return converter_sessao(getattr(response, "session", None))

    async def sign_out(self) -> None:
        try:
            await self.client.auth.sign_out()
        except AtividadesBaseException:
            raise
        except Exception as exc:
            raise mapear_erro(exc, "sign_out") from exc

    async def refresh_session(self) -> Optional[Session]:
        try:
            response = await self.client.auth.refresh_session()
        except AtividadesBaseException:
            raise
        except Exception as exc:
            raise mapear_erro(exc, "refresh_session") from exc
        return converter_sessao(getattr(response, "session", None))

    async def delete_user(self, user_id: str) -> None:
        if not self.service_key:
            raise AuthError(
                "Exclusão de conta indisponível: SUPABASE_SERVICE_ROLE_KEY não configurada",
                details={"usuario": user_id},
            )

        try:
            if self._admin_client is None:
                self._admin_client = await acreate_client(
                    self.url,
                    self.service_key,
                    options=AsyncClientOptions(persist_session=False, auto_refresh_token=False),
                )
            await self._admin_client.auth.admin.delete_user(user_id)
        except AtividadesBaseException:
            raise
        except Exception as exc:
            raise mapear_erro(exc, "delete_user") from exc
        self.logger.sucesso("Conta removida no Supabase", usuario=user_id)
