"""Testes da API HTTP com backend em memória."""

from __future__ import annotations

import unittest

from dependency_injector import providers
from fastapi.testclient import TestClient

from atividades.adapters.auth import InMemoryAuthBackend
from atividades.adapters.http import create_app
from atividades.config import AppConfig, SessionConfig
from atividades.container import ApplicationContainer
from atividades.core.exceptions import AuthTransportError
from atividades.core.models import AuthEvent, AuthState, Identity, Session


def _container(backend: InMemoryAuthBackend) -> ApplicationContainer:
    container = ApplicationContainer()
    container.config.override(providers.Object(AppConfig(session=SessionConfig(persist_session=False))))
    container.auth_backend.override(providers.Object(backend))
    return container


class ApiTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.backend = InMemoryAuthBackend()
        self.backend.add_user("alice@x.com", "segredo", user_id="u1")
        self.backend.add_user("bob@x.com", "segredo", user_id="u2")
        self.container = _container(self.backend)
        self.app = create_app(self.container)
        self.client = TestClient(self.app)
        self.client.__enter__()

    def tearDown(self) -> None:
        self.client.__exit__(None, None, None)
        self.container.reset_singletons()

    def _login(self, email: str = "alice@x.com", password: str = "segredo"):
        return self.client.post("/auth/login", json={"email": email, "password": password})


class TestAuthRoutes(ApiTestCase):
    def test_home_deslogado(self) -> None:
        resposta = self.client.get("/")

        self.assertEqual(resposta.status_code, 200)
        corpo = resposta.json()
        self.assertFalse(corpo["signed_in"])
        self.assertEqual(corpo["title"], "Login / Signup")
        self.assertIsNone(corpo["navbar"])

    def test_login_e_boas_vindas(self) -> None:
        resposta = self._login()

        self.assertEqual(resposta.status_code, 200)
        self.assertTrue(resposta.json()["signed_in"])
        self.assertEqual(resposta.json()["user"], {"id": "u1", "email": "alice@x.com"})

        home = self.client.get("/").json()
        self.assertTrue(home["signed_in"])
        self.assertEqual(home["title"], "Welcome, alice 👋")
        self.assertTrue(home["navbar"]["visible"])

    def test_login_rejeitado(self) -> None:
        resposta = self._login(password="errada")

        self.assertEqual(resposta.status_code, 401)
        self.assertEqual(resposta.json()["error"], "InvalidCredentialsError")
        self.assertFalse(self.client.get("/auth/session").json()["signed_in"])

    def test_login_com_falha_de_transporte(self) -> None:
        self.backend.fail_next(AuthTransportError("offline"), "sign_in")
        self.assertEqual(self._login().status_code, 503)

    def test_payload_incompleto(self) -> None:
        resposta = self.client.post("/auth/login", json={"email": "alice@x.com"})
        self.assertEqual(resposta.status_code, 422)

    def test_cadastro(self) -> None:
        self.backend.require_confirmation = True

        resposta = self.client.post("/auth/signup", json={"email": "nova@x.com", "password": "segredo"})

        self.assertEqual(resposta.status_code, 201)
        self.assertTrue(resposta.json()["confirmation_required"])
        self.assertFalse(self.client.get("/auth/session").json()["signed_in"])

    def test_cadastro_duplicado(self) -> None:
        resposta = self.client.post("/auth/signup", json={"email": "alice@x.com", "password": "outra"})
        self.assertEqual(resposta.status_code, 409)

    def test_logout_idempotente(self) -> None:
        self._login()

        self.assertEqual(self.client.post("/auth/logout").json()["status"], "signed_out")
        self.assertEqual(self.client.post("/auth/logout").status_code, 200)
        self.assertEqual(self.client.get("/auth/session").json()["state"], "signed_out")

    def test_exclusao_de_conta(self) -> None:
        anonima = self.client.delete("/auth/account", follow_redirects=False)
        self.assertEqual(anonima.status_code, 303)

        self._login()
        self.assertEqual(self.client.delete("/auth/account").status_code, 400)

        resposta = self.client.delete("/auth/account", params={"confirm": "true"})
        self.assertEqual(resposta.status_code, 200)
        self.assertEqual(self.backend.deleted_users, ["u1"])
        self.assertFalse(self.client.get("/auth/session").json()["signed_in"])


class TestCredencialDoCliente(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.visitante = TestClient(self.app)

    def test_login_emite_cookie_httponly(self) -> None:
        resposta = self._login()

        self.assertTrue(resposta.json()["session_id"])
        self.assertIn("httponly", resposta.headers["set-cookie"].lower())
        self.assertEqual(len(self.app.state.credentials), 1)

    def test_visitante_sem_credencial_nao_ve_rotas_protegidas(self) -> None:
        self._login()
        self.client.post("/activities/todos", json={"title": "segredo da alice"})

        resposta = self.visitante.get("/activities/todos", follow_redirects=False)

        self.assertEqual(resposta.status_code, 303)
        self.assertEqual(resposta.headers["location"], "/")
        self.assertEqual(self.client.get("/activities/todos").json()["total"], 1)

    def test_visitante_nao_exclui_a_conta(self) -> None:
        self._login()

        resposta = self.visitante.delete("/auth/account", params={"confirm": "true"}, follow_redirects=False)

        self.assertEqual(resposta.status_code, 303)
        self.assertEqual(self.backend.deleted_users, [])
        self.assertTrue(self.client.get("/auth/session").json()["signed_in"])

    def test_visitante_ve_home_e_navbar_deslogadas(self) -> None:
        self._login()

        home = self.visitante.get("/").json()
        navbar = self.visitante.get("/navbar", params={"path": "/activities/todos"}).json()

        self.assertFalse(home["signed_in"])
        self.assertEqual(home["title"], "Login / Signup")
        self.assertFalse(navbar["visible"])
        self.assertIsNone(navbar["user_email"])
        self.assertFalse(self.visitante.get("/auth/session").json()["signed_in"])

    def test_logout_do_visitante_nao_encerra_a_sessao(self) -> None:
        self._login()

        self.assertEqual(self.visitante.post("/auth/logout").status_code, 200)

        self.assertTrue(self.client.get("/auth/session").json()["signed_in"])

    def test_credencial_invalida_redireciona(self) -> None:
        self._login()
        resposta = self.visitante.get(
            "/activities/todos", headers={"Cookie": "atividades_session=forjado"}, follow_redirects=False
        )

        self.assertEqual(resposta.status_code, 303)

    def test_bearer_com_session_id(self) -> None:
        session_id = self._login().json()["session_id"]

        resposta = self.visitante.get("/activities/todos", headers={"Authorization": f"Bearer {session_id}"})

        self.assertEqual(resposta.status_code, 200)

    def test_login_de_outro_usuario_revoga_credencial_anterior(self) -> None:
        self._login()
        self.visitante.post("/auth/login", json={"email": "bob@x.com", "password": "segredo"})

        resposta = self.client.get("/activities/todos", follow_redirects=False)

        self.assertEqual(resposta.status_code, 303)
        self.assertEqual(self.visitante.get("/activities/todos").status_code, 200)

    def test_token_vencido_sem_renovacao_fecha_a_rota(self) -> None:
        self._login()
        manager = self.container.session_manager()
        vencida = Session(user=manager.current().user, access_token="velho", expires_at=1)
        self.backend.emit(AuthEvent.TOKEN_REFRESHED, vencida)
        self.backend.fail_next(AuthTransportError("offline"), "refresh_session")

        resposta = self.client.get("/activities/todos", follow_redirects=False)

        self.assertEqual(resposta.status_code, 303)
        self.assertIs(manager.state, AuthState.SIGNED_OUT)
        self.assertEqual(len(self.app.state.credentials), 0)


class TestSessaoPersistida(unittest.TestCase):
    def test_retoma_sessao_na_inicializacao(self) -> None:
        persistida = Session(user=Identity(id="u1", email="alice@x.com"), access_token="tok")
        backend = InMemoryAuthBackend(session=persistida)
        backend.add_user("alice@x.com", "segredo", user_id="u1")
        container = _container(backend)

        with TestClient(create_app(container)) as client:
            self.assertIs(container.session_manager().state, AuthState.SIGNED_IN)
            # Sessão retomada não vale para quem ainda não recebeu credencial
            self.assertFalse(client.get("/auth/session").json()["signed_in"])

            client.post("/auth/login", json={"email": "alice@x.com", "password": "segredo"})
            corpo = client.get("/auth/session").json()

        self.assertTrue(corpo["signed_in"])
        self.assertEqual(corpo["state"], "signed_in")
        self.assertNotIn("access_token", corpo)

    def test_sessao_persistida_expirada_e_renovada(self) -> None:
        vencida = Session(user=Identity(id="u1", email="alice@x.com"), access_token="velho", expires_at=1)
        container = _container(InMemoryAuthBackend(session=vencida))

        with TestClient(create_app(container)):
            atual = container.session_manager().current()

        self.assertNotEqual(atual.access_token, "velho")
        self.assertFalse(atual.is_expired())


class TestNavbarRoute(ApiTestCase):
    def test_navbar_oculta_sem_sessao(self) -> None:
        corpo = self.client.get("/navbar", params={"path": "/activities/todos"}).json()
        self.assertFalse(corpo["visible"])
        self.assertEqual(corpo["links"], [{"label": "Login", "href": "/"}])

    def test_navbar_com_sessao(self) -> None:
        self._login()

        corpo = self.client.get("/navbar", params={"path": "/activities/todos"}).json()

        self.assertTrue(corpo["visible"])
        self.assertEqual([link["label"] for link in corpo["links"]], ["Todo", "Drive", "Food", "Pokémon", "Notes"])
        self.assertEqual(corpo["user_email"], "alice@x.com")
        self.assertEqual(corpo["actions"], ["logout", "delete"])

    def test_navbar_oculta_em_rotas_publicas(self) -> None:
        self._login()
        self.assertFalse(self.client.get("/navbar", params={"path": "/auth"}).json()["visible"])
        self.assertFalse(self.client.get("/navbar", params={"path": "/"}).json()["visible"])


class TestTodosRoutes(ApiTestCase):
    def test_rota_protegida_redireciona_para_login(self) -> None:
        resposta = self.client.get("/activities/todos", follow_redirects=False)

        self.assertEqual(resposta.status_code, 303)
        self.assertEqual(resposta.headers["location"], "/")

    def test_fluxo_completo(self) -> None:
        self._login()

        criada = self.client.post("/activities/todos", json={"title": "  estudar  "})
        self.assertEqual(criada.status_code, 201)
        [todo] = criada.json()["todos"]
        self.assertEqual(todo["title"], "estudar")

        alternada = self.client.patch(f"/activities/todos/{todo['id']}/toggle").json()
        self.assertEqual(alternada["completed"], 1)

        removida = self.client.delete(f"/activities/todos/{todo['id']}").json()
        self.assertEqual(removida["total"], 0)

    def test_titulo_vazio(self) -> None:
        self._login()
        resposta = self.client.post("/activities/todos", json={"title": "   "})
        self.assertEqual(resposta.status_code, 422)

    def test_tarefas_isoladas_por_usuario(self) -> None:
        self._login()
        self.client.post("/activities/todos", json={"title": "da alice"})
        self.client.post("/auth/logout")

        self._login("bob@x.com")

        self.assertEqual(self.client.get("/activities/todos").json()["total"], 0)

    def test_logout_fecha_rotas_protegidas(self) -> None:
        self._login()
        self.assertEqual(self.client.get("/activities/todos").status_code, 200)

        self.client.post("/auth/logout")

        resposta = self.client.get("/activities/todos", follow_redirects=False)
        self.assertEqual(resposta.status_code, 303)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
