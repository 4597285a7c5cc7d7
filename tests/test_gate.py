"""Testes das views protegidas por sessao."""

from __future__ import annotations

import unittest
from unittest.mock import MagicMock

from atividades.adapters.auth import InMemoryAuthBackend
from atividades.core.models import AuthEvent, Session
from atividades.core.services import GatedView, SessionManager, is_gate_open, resolve_gate


def _render(session: Session) -> str:
    return f"conteudo de {session.email}"


def _redirect() -> str:
    return "redirect:/"


class TestResolveGate(unittest.TestCase):
    def test_sem_sessao_redireciona(self) -> None:
        self.assertEqual(resolve_gate(None, _render, _redirect), "redirect:/")


class TestGatedView(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.backend = InMemoryAuthBackend()
        self.backend.add_user("a@x.com", "segredo", user_id="u1")
        self.manager = SessionManager(self.backend, logger=MagicMock())

    async def asyncTearDown(self) -> None:
        await self.manager.close()

    async def test_nao_renderiza_antes_da_resolucao(self) -> None:
        view = GatedView(self.manager, _render, _redirect).mount()

        self.assertIsNone(view.output)
        self.assertEqual(view.renders, 0)
        self.assertFalse(is_gate_open(self.manager))

        await self.manager.start()
        self.assertEqual(view.output, "redirect:/")

    async def test_renderiza_e_redireciona_conforme_sessao(self) -> None:
        await self.manager.start()
        view = GatedView(self.manager, _render, _redirect).mount()
        self.assertEqual(view.output, "redirect:/")

        await self.manager.sign_in("a@x.com", "segredo")
        self.assertEqual(view.output, "conteudo de a@x.com")
        self.assertTrue(is_gate_open(self.manager))

        await self.manager.sign_out()
        self.assertEqual(view.output, "redirect:/")
        self.assertEqual(view.renders, 3)

    async def test_expiracao_de_token_redireciona(self) -> None:
        await self.manager.start()
        await self.manager.sign_in("a@x.com", "segredo")
        view = GatedView(self.manager, _render, _redirect).mount()

        self.backend.emit(AuthEvent.TOKEN_REFRESH_FAILED)

        self.assertEqual(view.output, "redirect:/")

    async def test_desmontada_nao_recalcula(self) -> None:
        await self.manager.start()
        with GatedView(self.manager, _render, _redirect) as view:
            self.assertTrue(view.mounted)
        self.assertFalse(view.mounted)

        await self.manager.sign_in("a@x.com", "segredo")

        self.assertEqual(view.output, "redirect:/")
        self.assertEqual(self.manager.subscriber_count, 0)

    async def test_mount_duplo_nao_duplica_assinatura(self) -> None:
        await self.manager.start()
        view = GatedView(self.manager, _render, _redirect)
        view.mount()
        view.mount()
        self.assertEqual(self.manager.subscriber_count, 1)
        view.unmount()


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
