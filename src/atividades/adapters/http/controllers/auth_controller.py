"""Endpoints de autenticação e manutenção da sessão do processo."""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, Request, Response

from atividades.adapters.http.base import BaseController
from atividades.adapters.http.credentials import (
    CredentialStore,
    apagar_cookie,
    credencial_da_requisicao,
    gravar_cookie,
)
from atividades.adapters.http.dependencies import (
    get_account_service,
    get_credential_store,
    get_request_session,
    get_session_manager,
    require_session,
)
from atividades.adapters.http.schemas import (
    CredentialsRequest,
    OperationResponse,
    SessionResponse,
    SignUpResponse,
)
from atividades.core.models import AuthState, Session
from atividades.core.services import AccountService, SessionManager


class AuthController(BaseController):
    """Controller para login, cadastro, logout e exclusão de conta."""

    prefix = "/auth"
    tags = ["Auth"]

    def _register_routes(self) -> None:
        self.router.add_api_route("/login", self.login, methods=["POST"], response_model=SessionResponse)
        self.router.add_api_route(
            "/signup", self.signup, methods=["POST"], response_model=SignUpResponse, status_code=201
        )
        self.router.add_api_route("/logout", self.logout, methods=["POST"], response_model=OperationResponse)
        self.router.add_api_route("/session", self.session, methods=["GET"], response_model=SessionResponse)
        self.router.add_api_route(
            "/account", self.delete_account, methods=["DELETE"], response_model=OperationResponse
        )

    def _emitir(
        self, request: Request, response: Response, store: CredentialStore, session: Session
    ) -> str:
        session_id = store.emitir(session)
        gravar_cookie(request, response, session_id)
        return session_id

    async def login(
        self,
        payload: CredentialsRequest,
        request: Request,
        response: Response,
        manager: SessionManager = Depends(get_session_manager),
        store: CredentialStore = Depends(get_credential_store),
    ) -> SessionResponse:
        """
        Envia as credenciais ao backend e emite a credencial do cliente.

        A resposta reflete a sessão após o processamento dos eventos já
        entregues; com backends assíncronos ela pode ainda estar ausente,
        e nesse caso nenhuma credencial é emitida.
        """
        self.log_request("login", {"email": payload.email})
        await manager.sign_in(payload.email, payload.password)

        session = await manager.current_valid()
        result = SessionResponse.from_session(manager.state, session)
        if session is not None:
            result.session_id = self._emitir(request, response, store, session)
        self.log_response("login", {"signed_in": result.signed_in})
        return result

    async def signup(
        self,
        payload: CredentialsRequest,
        request: Request,
        response: Response,
        manager: SessionManager = Depends(get_session_manager),
        store: CredentialStore = Depends(get_credential_store),
    ) -> SignUpResponse:
        self.log_request("signup", {"email": payload.email})
        requires_confirmation = await manager.sign_up(payload.email, payload.password)
        if requires_confirmation:
            return SignUpResponse(
                confirmation_required=True, message="Signup successful! Check your email to confirm."
            )

        session = await manager.current_valid()
        result = SignUpResponse(confirmation_required=False, message="Signup successful!")
        if session is not None:
            result.session_id = self._emitir(request, response, store, session)
        return result

    async def logout(
        self,
        request: Request,
        response: Response,
        session: Optional[Session] = Depends(get_request_session),
        manager: SessionManager = Depends(get_session_manager),
        store: CredentialStore = Depends(get_credential_store),
    ) -> OperationResponse:
        """Encerra a sessão quando a credencial do cliente é válida; sem ela, apenas limpa o cookie."""
        self.log_request("logout")
        store.revogar(credencial_da_requisicao(request))
        apagar_cookie(response)
        if session is not None:
            await manager.sign_out()
        return OperationResponse(status="signed_out")

    async def session(
        self,
        session: Optional[Session] = Depends(get_request_session),
        manager: SessionManager = Depends(get_session_manager),
    ) -> SessionResponse:
        if session is not None:
            return SessionResponse.from_session(manager.state, session)
        state = AuthState.UNRESOLVED if manager.state is AuthState.UNRESOLVED else AuthState.SIGNED_OUT
        return SessionResponse.from_session(state, None)

    async def delete_account(
        self,
        response: Response,
        confirm: bool = False,
        session: Session = Depends(require_session),
        account_service: AccountService = Depends(get_account_service),
    ) -> OperationResponse:
        """Exclui a conta logada. Exige ``?confirm=true``."""
        self.log_request("delete_account", {"confirm": confirm, "usuario": session.user_id})
        await account_service.delete_account(confirm=confirm)
        apagar_cookie(response)
        return OperationResponse(status="deleted", message="Account deleted.")


# Cria instância do controller e exporta o router
controller = AuthController()
router = controller.router

__all__ = ["router", "AuthController"]
