"""Testes da montagem do container de dependências."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from dependency_injector import providers

from atividades.adapters.auth import InMemoryAuthBackend, SupabaseAuthBackend
from atividades.adapters.repositories import (
    FileSessionStorage,
    InMemorySessionStorage,
    InMemoryTodoRepository,
    SupabaseTodoRepository,
)
from atividades.config import APIConfig, AppConfig, SessionConfig
from atividades.container import ApplicationContainer, get_container, reset_container


class TestApplicationContainer(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.arquivo = Path(self._tmp.name) / "session.json"

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _container(self, config: AppConfig) -> ApplicationContainer:
        container = ApplicationContainer()
        container.config.override(providers.Object(config))
        return container

    def test_sem_supabase_usa_backends_em_memoria(self) -> None:
        container = self._container(AppConfig(session=SessionConfig(persist_session=False)))

        self.assertIsInstance(container.auth_backend(), InMemoryAuthBackend)
        self.assertIsInstance(container.session_storage(), InMemorySessionStorage)
        self.assertIsInstance(container.todo_repository(), InMemoryTodoRepository)

    def test_com_supabase_usa_adaptadores_reais(self) -> None:
        config = AppConfig(
            api=APIConfig(supabase_url="https://exemplo.supabase.co", supabase_key="anon"),
            session=SessionConfig(storage_file=self.arquivo),
        )
        container = self._container(config)

        backend = container.auth_backend()
        self.assertIsInstance(backend, SupabaseAuthBackend)
        self.assertIsInstance(backend.storage, FileSessionStorage)
        self.assertIsNone(backend.service_key)
        self.assertIsInstance(container.todo_repository(), SupabaseTodoRepository)

    def test_um_gerenciador_por_container(self) -> None:
        container = self._container(AppConfig(session=SessionConfig(persist_session=False)))

        manager = container.session_manager()

        self.assertIs(container.session_manager(), manager)
        self.assertIs(manager.backend, container.auth_backend())
        self.assertIs(container.account_service()._manager, manager)

    def test_container_global(self) -> None:
        reset_container()
        try:
            self.assertIs(get_container(), get_container())
        finally:
            reset_container()


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
