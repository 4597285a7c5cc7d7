"""Testes do backend Supabase com cliente simulado."""

from __future__ import annotations

import unittest
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

from supabase import AuthError as SupabaseAuthError

from atividades.adapters.auth.supabase_auth import (
    SupabaseAuthBackend,
    converter_sessao,
    mapear_erro,
    traduzir_evento,
)
from atividades.core.exceptions import (
    AuthError,
    AuthTransportError,
    DuplicateAccountError,
    InvalidCredentialsError,
    UnconfirmedAccountError,
)
from atividades.core.models import AuthEvent


class _ErroApi(SupabaseAuthError):
    """Erro do GoTrue com status e código definidos pelo teste."""

    def __init__(self, message: str, status, code=None) -> None:
        Exception.__init__(self, message)
        self.message = message
        self.status = status
        self.code = code


def _raw_session(user_id: str = "u1", email: str = "a@x.com"):
    return SimpleNamespace(
        access_token="acesso",
        refresh_token="renova",
        expires_at=1700000000,
        user=SimpleNamespace(id=user_id, email=email),
    )


class TestConversoes(unittest.TestCase):
    def test_converter_sessao(self) -> None:
        session = converter_sessao(_raw_session())
        self.assertEqual(session.user_id, "u1")
        self.assertEqual(session.email, "a@x.com")
        self.assertEqual(session.expires_at, 1700000000)
        self.assertIsNone(converter_sessao(None))

    def test_traduzir_eventos(self) -> None:
        session = converter_sessao(_raw_session())
        self.assertIs(traduzir_evento("SIGNED_IN", session), AuthEvent.SIGNED_IN)
        self.assertIs(traduzir_evento("USER_DELETED", None), AuthEvent.SIGNED_OUT)
        self.assertIs(traduzir_evento("TOKEN_REFRESHED", None), AuthEvent.TOKEN_REFRESH_FAILED)
        self.assertIs(traduzir_evento("PASSWORD_RECOVERY", session), AuthEvent.USER_UPDATED)

    def test_mapear_erros(self) -> None:
        self.assertIsInstance(
            mapear_erro(_ErroApi("Invalid login credentials", 400, "invalid_credentials"), "sign_in"),
            InvalidCredentialsError,
        )
        self.assertIsInstance(
            mapear_erro(_ErroApi("Email not confirmed", 400, "email_not_confirmed"), "sign_in"),
            UnconfirmedAccountError,
        )
        self.assertIsInstance(
            mapear_erro(_ErroApi("User already registered", 422, "user_already_exists"), "sign_up"),
            DuplicateAccountError,
        )
        self.assertIsInstance(mapear_erro(_ErroApi("bad gateway", 502), "sign_in"), AuthTransportError)
        self.assertIsInstance(mapear_erro(_ErroApi("sem rede", 0), "sign_in"), AuthTransportError)
        self.assertIsInstance(mapear_erro(ConnectionError("recusada"), "sign_in"), AuthTransportError)

        generico = mapear_erro(_ErroApi("Password should be at least 6 characters", 422, "weak_password"), "sign_up")
        self.assertIs(type(generico), AuthError)


class TestSupabaseAuthBackend(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self.auth = MagicMock()
        self.auth.get_session = AsyncMock(return_value=_raw_session())
        self.auth.sign_in_with_password = AsyncMock()
        self.auth.sign_up = AsyncMock()
        self.auth.sign_out = AsyncMock()
        self.auth.refresh_session = AsyncMock()
        self.backend = SupabaseAuthBackend("https://exemplo.supabase.co", "anon", logger=MagicMock())
        self.backend._client = SimpleNamespace(auth=self.auth)

    async def test_sem_configuracao_falha_como_transporte(self) -> None:
        backend = SupabaseAuthBackend(None, None, logger=MagicMock())
        with self.assertRaises(AuthTransportError):
            await backend.connect()
        with self.assertRaises(AuthTransportError):
            await backend.get_current_session()

    async def test_get_current_session(self) -> None:
        session = await self.backend.get_current_session()
        self.assertEqual(session.user_id, "u1")

    async def test_login_envia_credenciais(self) -> None:
        await self.backend.password_sign_in("a@x.com", "segredo")
        self.auth.sign_in_with_password.assert_awaited_once_with({"email": "a@x.com", "password": "segredo"})

    async def test_login_rejeitado(self) -> None:
        self.auth.sign_in_with_password.side_effect = _ErroApi("Invalid login credentials", 400, "invalid_credentials")
        with self.assertRaises(InvalidCredentialsError):
            await self.backend.password_sign_in("a@x.com", "errada")

    async def test_cadastro_exigindo_confirmacao(self) -> None:
        self.auth.sign_up.return_value = SimpleNamespace(
            user=SimpleNamespace(id="u9", email="n@x.com", identities=[SimpleNamespace(id="i1")]),
            session=None,
        )
        self.assertIsNone(await self.backend.password_sign_up("n@x.com", "segredo"))

    async def test_cadastro_de_email_existente_sem_identidades(self) -> None:
        self.auth.sign_up.return_value = SimpleNamespace(
            user=SimpleNamespace(id="u1", email="a@x.com", identities=[]),
            session=None,
        )
        with self.assertRaises(DuplicateAccountError):
            await self.backend.password_sign_up("a@x.com", "segredo")

    async def test_renovacao_sem_sessao_retorna_none(self) -> None:
        self.auth.refresh_session.return_value = SimpleNamespace(session=None, user=None)
        self.assertIsNone(await self.backend.refresh_session())

    async def test_excluir_sem_service_key(self) -> None:
        with self.assertRaises(AuthError):
            await self.backend.delete_user("u1")

    def test_eventos_chegam_aos_listeners_registrados_antes_da_conexao(self) -> None:
        recebidos = []
        handle = self.backend.on_change(lambda evento, session: recebidos.append((evento, session)))

        self.backend._dispatch("SIGNED_IN", _raw_session())
        handle.unsubscribe()
        self.backend._dispatch("SIGNED_OUT", None)

        self.assertEqual(len(recebidos), 1)
        self.assertIs(recebidos[0][0], AuthEvent.SIGNED_IN)
        self.assertEqual(recebidos[0][1].user_id, "u1")


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
